from __future__ import annotations

from typing import Protocol


class SecretVerifier(Protocol):
    def verify(self, candidate: str) -> bool: ...
