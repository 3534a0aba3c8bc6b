"""
Shared interfaces: the driver contract and key-ring configuration.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from cipherseal.message import Expiry
from cipherseal.secret import SecretLike

if TYPE_CHECKING:
    from cipherseal.message_verifier import MessageVerifier

# Dot-separated token text
CypherText = str


@runtime_checkable
class EncryptionDriverContract(Protocol):
    """Capability every encrypter exposes, whether a bare driver or a key ring."""

    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        """Encrypt ``payload``, optionally bound to an expiry and a purpose."""
        ...

    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        """Decrypt ``token`` or return ``None``; never raises for bad input."""
        ...

    def get_message_verifier(self) -> MessageVerifier:
        """Signer bound to the same keys."""
        ...


DriverFactory = Callable[[SecretLike], EncryptionDriverContract]


@dataclass(frozen=True)
class EncryptionConfig:
    """A driver factory plus the ordered key ring it is instantiated over.

    ``keys[0]`` is the newest key and the only one used to encrypt.
    """

    driver: DriverFactory
    keys: Sequence[SecretLike]
