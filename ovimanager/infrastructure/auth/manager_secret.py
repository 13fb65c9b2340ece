from __future__ import annotations

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class SecretHasher:
    def __init__(self, schemes: tuple[str, ...] = ("bcrypt",)) -> None:
        self._context = CryptContext(schemes=schemes, deprecated="auto")

    def hash(self, secret: str) -> str:
        return self._context.hash(secret.strip())

    def verify(self, candidate: str, hashed: str) -> bool:
        return self._context.verify(candidate.strip(), hashed)


class HashedSecretVerifier:
    """Checks the manager secret against a stored hash.

    Without a configured hash every attempt is refused.
    """

    def __init__(self, secret_hash: str | None, hasher: SecretHasher | None = None) -> None:
        self._secret_hash = secret_hash
        self._hasher = hasher or SecretHasher()

    def verify(self, candidate: str) -> bool:
        if not self._secret_hash or not candidate:
            return False
        try:
            return self._hasher.verify(candidate, self._secret_hash)
        except ValueError:
            logger.warning("Configured manager secret hash is not a recognized hash")
            return False
