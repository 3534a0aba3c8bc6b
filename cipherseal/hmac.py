"""
HMAC-SHA256 signer producing base64url digests.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from cipherseal.encoding import base64url_encode
from cipherseal.safe_equal import safe_equal


class Hmac:
    """SHA-256 HMAC bound to a single key, used to check value integrity."""

    def __init__(self, key: bytes) -> None:
        self._key = key

    def generate(self, value: str) -> str:
        """Return the base64url HMAC of ``value``'s UTF-8 bytes."""
        h = crypto_hmac.HMAC(self._key, hashes.SHA256())
        h.update(value.encode("utf-8"))
        return base64url_encode(h.finalize())

    def compare(self, value: str, existing_hmac: str) -> bool:
        """Recompute the HMAC of ``value`` and compare it in constant time."""
        return safe_equal(self.generate(value), existing_hmac)
