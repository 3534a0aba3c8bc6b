"""
ChaCha20-Poly1305 driver (IETF variant, 12-byte nonce).
"""

from __future__ import annotations

from collections.abc import Sequence

from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305 as _ChaCha20Poly1305

from cipherseal.contracts import EncryptionConfig
from cipherseal.drivers.aead import AEADDriver
from cipherseal.secret import SecretLike


def chacha20poly1305(id: str, keys: Sequence[SecretLike]) -> EncryptionConfig:
    """Key-ring config building one :class:`ChaCha20Poly1305` driver per key."""
    return EncryptionConfig(driver=lambda key: ChaCha20Poly1305(id=id, keys=[key]), keys=keys)


class ChaCha20Poly1305(AEADDriver):
    """ChaCha20 stream cipher with a Poly1305 tag."""

    cipher = _ChaCha20Poly1305
