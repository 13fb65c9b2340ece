from __future__ import annotations

from ovimanager.infrastructure.auth.manager_secret import HashedSecretVerifier, SecretHasher


def test_verifier_accepts_matching_secret(manager_secret_hash):
    verifier = HashedSecretVerifier(manager_secret_hash)
    assert verifier.verify("shepherd-override")
    assert verifier.verify("  shepherd-override ")
    assert not verifier.verify("shepherd")
    assert not verifier.verify("")


def test_verifier_without_hash_refuses_everything():
    assert not HashedSecretVerifier(None).verify("anything")


def test_verifier_with_unrecognized_hash_refuses():
    assert not HashedSecretVerifier("not-a-hash").verify("anything")


def test_hasher_round_trip():
    hasher = SecretHasher()
    hashed = hasher.hash("s3cret")
    assert hashed.startswith("$2")
    assert hasher.verify("s3cret", hashed)
