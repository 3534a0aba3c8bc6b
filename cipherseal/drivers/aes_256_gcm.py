"""
AES-256-GCM driver.
"""

from __future__ import annotations

from collections.abc import Sequence

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from cipherseal.contracts import EncryptionConfig
from cipherseal.drivers.aead import AEADDriver
from cipherseal.secret import SecretLike


def aes256gcm(id: str, keys: Sequence[SecretLike]) -> EncryptionConfig:
    """Key-ring config building one :class:`AES256GCM` driver per key."""
    return EncryptionConfig(driver=lambda key: AES256GCM(id=id, keys=[key]), keys=keys)


class AES256GCM(AEADDriver):
    """AES-256 in Galois/Counter Mode with a 12-byte IV and 16-byte tag."""

    cipher = AESGCM
