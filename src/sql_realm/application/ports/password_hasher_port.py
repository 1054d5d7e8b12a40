"""Port for password hashing and verification."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Salted password hashing/verification contract."""

    def hash_password(self, password: str) -> str:
        """Hash plaintext password with a fresh embedded salt."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext password against a stored salted hash."""
