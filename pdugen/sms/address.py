"""Destination address (TP-DA) encoding."""

from __future__ import annotations

import re

from pdugen.sms.errors import InvalidNumberError

INTERNATIONAL = "91"

_NON_DIGIT = re.compile(r"[^0-9]")


def semi_octets(digits: str) -> str:
    """Pad to even length with ``F`` and swap each digit pair."""
    if len(digits) % 2 == 1:
        digits += "F"
    return "".join(digits[i + 1] + digits[i] for i in range(0, len(digits), 2))


def swap_semi_octets(swapped: str) -> str:
    """Reverse :func:`semi_octets`, dropping the filler nibble."""
    digits = "".join(swapped[i + 1] + swapped[i] for i in range(0, len(swapped), 2))
    return digits.rstrip("F")


def encode_address(number: str) -> str:
    """Encode ``number`` as length byte, type-of-number and swapped digits.

    Every non-digit character (``+``, spaces, dashes) is dropped. The
    type-of-number is always international; the length counts digits
    without the filler.
    """
    digits = _NON_DIGIT.sub("", number)
    if not digits:
        raise InvalidNumberError(f"no digits in number {number!r}")
    return f"{len(digits):02X}" + INTERNATIONAL + semi_octets(digits)
