"""
Token helpers for cipherseal tests.

Builds drivers by name and produces tampered variants of valid tokens:
single-character substitutions, field swaps, truncations and so on. Every
tampered token must decrypt to ``None``.
"""

from __future__ import annotations

from collections.abc import Sequence

from cipherseal.drivers import AES256CBC, AES256GCM, ChaCha20Poly1305, Legacy
from cipherseal.drivers.base import BaseDriver
from cipherseal.secret import SecretLike

SEPARATOR = "."

# URL-safe alphabet used by every token field
BASE64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"

DRIVER_NAMES = ["aes_256_cbc", "aes_256_gcm", "chacha20_poly1305", "legacy"]

ID_DRIVERS = {
    "aes_256_cbc": AES256CBC,
    "aes_256_gcm": AES256GCM,
    "chacha20_poly1305": ChaCha20Poly1305,
}

# Fields per token, id included where the driver has one
TOKEN_FIELDS = {
    "aes_256_cbc": 4,
    "aes_256_gcm": 4,
    "chacha20_poly1305": 4,
    "legacy": 3,
}


def make_driver(name: str, keys: Sequence[SecretLike], id: str = "nova") -> BaseDriver:
    """Build a driver by its config name."""
    if name == "legacy":
        return Legacy(keys=keys)
    return ID_DRIVERS[name](id=id, keys=keys)


def replace_char(token: str, index: int, char: str) -> str:
    """Return ``token`` with the character at ``index`` replaced."""
    return token[:index] + char + token[index + 1 :]


def other_char(char: str) -> str:
    """A base64url character different from ``char``."""
    return "A" if char != "A" else "B"


def flip_char(token: str, index: int) -> str:
    """Replace one character with a different base64url character.

    Separators are left alone so the token keeps its field count.
    """
    if token[index] == SEPARATOR:
        raise ValueError(f"index {index} is a separator")
    return replace_char(token, index, other_char(token[index]))


def swap_fields(token: str, i: int, j: int) -> str:
    """Swap two fields of a token."""
    parts = token.split(SEPARATOR)
    parts[i], parts[j] = parts[j], parts[i]
    return SEPARATOR.join(parts)


def replace_field(token: str, index: int, value: str) -> str:
    """Replace one field of a token."""
    parts = token.split(SEPARATOR)
    parts[index] = value
    return SEPARATOR.join(parts)


def drop_field(token: str, index: int) -> str:
    """Remove one field, leaving the token a field short."""
    parts = token.split(SEPARATOR)
    del parts[index]
    return SEPARATOR.join(parts)


def non_separator_indices(token: str) -> list[int]:
    """Positions that can be tampered without changing the field count."""
    return [i for i, char in enumerate(token) if char != SEPARATOR]


def malformed_tokens(token: str) -> list[str]:
    """Structurally broken variants of a valid token."""
    field_count = len(token.split(SEPARATOR))
    variants = [
        "",
        SEPARATOR,
        SEPARATOR * (field_count - 1),
        token + SEPARATOR,
        SEPARATOR + token,
        token + SEPARATOR + "extra",
        token[: len(token) // 2],
        token.replace(SEPARATOR, ""),
        token.replace(SEPARATOR, SEPARATOR * 2, 1),
        token + "!",
    ]
    variants.extend(replace_field(token, i, "") for i in range(field_count))
    variants.extend(drop_field(token, i) for i in range(field_count))
    return variants
