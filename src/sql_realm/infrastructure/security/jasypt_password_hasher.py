"""Verifier for digests produced by Jasypt's StrongPasswordEncryptor.

Stored values are ``base64(salt || digest)`` where ``digest`` is SHA-256 over
``salt || utf8(NFC(password))`` re-hashed until 100000 iterations in total.
Existing user tables written by that encryptor can be reused unchanged.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import secrets
import unicodedata
from typing import Final

from sql_realm.application.ports.password_hasher_port import PasswordHasherPort

SALT_SIZE_BYTES: Final = 16
ITERATIONS: Final = 100_000
DIGEST_SIZE_BYTES: Final = hashlib.sha256().digest_size


def _digest(password: str, salt: bytes, iterations: int) -> bytes:
    message = unicodedata.normalize("NFC", password).encode("utf-8")
    digest = hashlib.sha256(salt + message).digest()
    for _ in range(iterations - 1):
        digest = hashlib.sha256(digest).digest()
    return digest


class JasyptStrongPasswordHasher(PasswordHasherPort):
    """Salted iterated SHA-256 hasher compatible with Jasypt strong digests."""

    def __init__(self, *, iterations: int = ITERATIONS) -> None:
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self._iterations = iterations

    def hash_password(self, password: str) -> str:
        salt = secrets.token_bytes(SALT_SIZE_BYTES)
        digest = _digest(password, salt, self._iterations)
        return base64.b64encode(salt + digest).decode("ascii")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            decoded = base64.b64decode(password_hash.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError):
            return False
        if len(decoded) != SALT_SIZE_BYTES + DIGEST_SIZE_BYTES:
            return False

        salt, expected = decoded[:SALT_SIZE_BYTES], decoded[SALT_SIZE_BYTES:]
        try:
            actual = _digest(password, salt, self._iterations)
        except UnicodeEncodeError:
            return False
        return hmac.compare_digest(actual, expected)
