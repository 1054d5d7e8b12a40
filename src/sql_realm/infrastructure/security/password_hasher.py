"""Bcrypt password hasher adapter."""

from __future__ import annotations

from typing import Final

import bcrypt

from sql_realm.application.ports.password_hasher_port import PasswordHasherPort

# bcrypt only reads this many bytes; longer inputs would collide on their prefix.
MAX_PASSWORD_BYTES: Final = 72


class PasswordTooLongError(ValueError):
    """Raised when a password exceeds what bcrypt can hash without truncation."""

    def __init__(self) -> None:
        super().__init__(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt; salt and cost live in the hash.

    Passwords over 72 UTF-8 bytes are rejected on hashing and never verify,
    independent of the installed bcrypt release.
    """

    def hash_password(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError()
        return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            encoded = password.encode("utf-8")
            if len(encoded) > MAX_PASSWORD_BYTES:
                return False
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            return False
