"""AES-256-GCM cipher for stored CMS passwords.

Ciphertext format: ``enc:`` followed by base64 of ``IV (12 bytes) ||
ciphertext || tag``. Values without the prefix predate encryption and are
passed through unchanged on decrypt.
"""

from __future__ import annotations

import base64
import binascii
import os
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

ENC_PREFIX = "enc:"
KEY_BYTES = 32
IV_BYTES = 12


class CmsError(Exception):
    """Base class for CMS cipher errors."""


class CmsKeyError(CmsError):
    """Raised when the encryption key is missing or malformed."""


class CmsDecryptError(CmsError):
    """Raised when an ``enc:`` value cannot be decrypted."""


def is_encrypted(value: str) -> bool:
    return value.startswith(ENC_PREFIX)


def generate_encryption_key() -> str:
    """Generate a 256-bit hex key (64 hex characters)."""
    return secrets.token_hex(KEY_BYTES)


class CmsCipher:
    """Encrypts and decrypts CMS credentials with a fixed 256-bit key."""

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_BYTES:
            raise CmsKeyError(
                f"CMS encryption key must be {KEY_BYTES} bytes "
                f"({KEY_BYTES * 2} hex characters), got {len(key)} bytes"
            )
        self._aead = AESGCM(key)

    @classmethod
    def from_hex(cls, key_hex: str | None) -> CmsCipher:
        """Build a cipher from a hex-encoded key."""
        if not key_hex:
            raise CmsKeyError("CMS encryption key not configured")
        try:
            key = bytes.fromhex(key_hex.strip())
        except ValueError as e:
            raise CmsKeyError("CMS encryption key is not valid hex") from e
        return cls(key)

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_BYTES)
        # Lone surrogates are replaced, not rejected
        ciphertext = self._aead.encrypt(iv, plaintext.encode("utf-8", errors="replace"), None)
        return ENC_PREFIX + base64.b64encode(iv + ciphertext).decode("ascii")

    def decrypt(self, value: str) -> str:
        """Decrypt *value*; legacy plaintext is returned as-is."""
        if not is_encrypted(value):
            return value

        try:
            combined = base64.b64decode(value[len(ENC_PREFIX):], validate=True)
        except (binascii.Error, ValueError) as e:
            raise CmsDecryptError("Encrypted value is not valid base64") from e

        if len(combined) <= IV_BYTES:
            raise CmsDecryptError("Encrypted value is too short")

        iv, ciphertext = combined[:IV_BYTES], combined[IV_BYTES:]
        try:
            plaintext = self._aead.decrypt(iv, ciphertext, None)
        except InvalidTag as e:
            raise CmsDecryptError("Encrypted value failed authentication") from e
        return plaintext.decode("utf-8")
