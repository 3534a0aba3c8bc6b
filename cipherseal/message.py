"""
Signed-envelope plaintext.

:class:`MessageBuilder` produces the canonical JSON that is either signed
directly (see :mod:`cipherseal.message_verifier`) or encrypted by a driver.

Canonical form:
- Object keys in the fixed order ``message``, ``purpose``, ``expiryDate``
- Absent keys omitted
- Compact separators, non-ASCII kept as UTF-8
- Dates rendered like JavaScript's ``Date#toJSON``

Two implementations of the format must produce byte-identical plaintext for
the same logical input; the test vectors in ``tests/vectors`` pin this down.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta, timezone
from typing import Any

from cipherseal.duration import parse_expiry, parse_iso_string, to_iso_string

Expiry = str | int | float | timedelta | datetime


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return to_iso_string(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any) -> str:
    """Serialize ``value`` to compact canonical JSON."""
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_default,
    )


class MessageBuilder:
    """Builds and verifies envelope plaintext with optional expiry and purpose."""

    def build(
        self,
        message: Any,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> str:
        """Serialize ``message`` with optional purpose and expiry.

        Args:
            message: Any JSON-serializable value (dates are allowed).
            expires_in: Relative duration or absolute deadline.
            purpose: Scope the envelope must be verified against.

        Returns:
            Canonical JSON text.

        Raises:
            TypeError: If ``message`` cannot be serialized.
            ValueError: If ``expires_in`` is not a valid duration, or the
                message contains NaN/infinity.
        """
        envelope: dict[str, Any] = {"message": message}
        if purpose is not None:
            envelope["purpose"] = purpose

        expiry_date = parse_expiry(expires_in)
        if expiry_date is not None:
            envelope["expiryDate"] = to_iso_string(expiry_date)

        return dumps(envelope)

    def verify(self, message: str | bytes, purpose: str | None = None) -> Any | None:
        """Parse envelope plaintext and check purpose and expiry.

        Returns:
            The wrapped message, or ``None`` if the plaintext is not a valid
            envelope, the purpose differs, or the deadline has passed.
        """
        try:
            parsed = json.loads(message)
        except (TypeError, ValueError):
            return None

        if not isinstance(parsed, dict) or parsed.get("message") is None:
            return None

        if parsed.get("purpose") != purpose:
            return None

        if self._is_expired(parsed):
            return None

        return parsed["message"]

    @staticmethod
    def _is_expired(parsed: dict[str, Any]) -> bool:
        raw = parsed.get("expiryDate")
        if raw is None:
            return False

        # Unparsable deadlines fail closed
        expiry_date = parse_iso_string(raw)
        if expiry_date is None:
            return True
        return expiry_date < datetime.now(timezone.utc)
