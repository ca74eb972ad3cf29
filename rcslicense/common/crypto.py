"""Common cryptographic utilities.
"""

import secrets

from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes


class CryptoUtils:
    """Utility class for cryptographic operations."""

    @staticmethod
    def sha256(data: bytes) -> bytes:
        """Return the raw SHA-256 digest of data."""
        digest = hashes.Hash(hashes.SHA256())
        digest.update(data)
        return digest.finalize()

    @staticmethod
    def hmac_sha256_hex(data: bytes, key: bytes) -> str:
        """Return the lowercase hex HMAC-SHA256 of data."""
        mac = hmac.HMAC(key, hashes.SHA256())
        mac.update(data)
        return mac.finalize().hex()

    @staticmethod
    def derive_key(passphrase: str, key_size: int = 16) -> bytes:
        """Hash a passphrase into an AES key.

        The legacy OpenSSL binding silently used the first ``key_size`` bytes
        of the 32-byte SHA-256 digest, so the key is truncated the same way.
        """
        return CryptoUtils.sha256(passphrase.encode("utf-8"))[:key_size]

    @staticmethod
    def aes_cbc_encrypt(clear_text: bytes, key: bytes) -> bytes:
        """Encrypt with AES-CBC, zero IV and PKCS#7 padding."""
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(clear_text) + padder.finalize()
        iv = b"\x00" * (algorithms.AES.block_size // 8)
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    @staticmethod
    def random_hex(num_bytes: int) -> str:
        """Return num_bytes of randomness as lowercase hex."""
        return secrets.token_hex(num_bytes)

    @staticmethod
    def watermark(length: int = 8) -> str:
        """Return a random url-safe token of the given length."""
        return secrets.token_urlsafe(length)[:length]
