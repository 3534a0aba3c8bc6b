"""
URL-safe base64 without padding.

Every binary field in a token goes through this codec. Decoding is
fail-soft: malformed input returns ``None`` instead of raising, so token
parsers can short-circuit without exception handling at every call site.
"""

from __future__ import annotations

import base64
import binascii


def base64url_encode(data: bytes | str) -> str:
    """Encode bytes (or a UTF-8 string) as unpadded base64url.

    Args:
        data: Raw bytes, or a string that is UTF-8 encoded first.

    Returns:
        Base64url text with ``+``→``-``, ``/``→``_`` and no ``=`` padding.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(encoded: str) -> bytes | None:
    """Decode unpadded base64url text.

    The input is re-padded to a multiple of four characters and decoded
    strictly. Characters outside the base64url alphabet, an impossible
    length, or a non-canonical encoding (stray bits in the last character)
    produce ``None``, so every decodable field has exactly one spelling.

    Args:
        encoded: Base64url text, with or without padding.

    Returns:
        Decoded bytes, or ``None`` if the input is not valid base64url.
    """
    if not isinstance(encoded, str):
        return None

    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        decoded = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError):
        return None

    if base64url_encode(decoded) != encoded.rstrip("="):
        return None
    return decoded
