"""Alphabet detection and per-frame character budgets."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class Alphabet(str, Enum):
    NARROW = "7bit"
    WIDE = "ucs2"


SINGLE_BUDGET = {Alphabet.NARROW: 160, Alphabet.WIDE: 70}
SEGMENT_BUDGET = {Alphabet.NARROW: 152, Alphabet.WIDE: 67}


def is_single_byte(ch: str) -> bool:
    """Default narrow predicate: the character is one byte in UTF-8.

    This only checks the ASCII range, not membership in the GSM default
    table, so characters such as ``{`` or ``~`` pass and are sent as their
    ASCII code.
    """
    return len(ch.encode("utf-8")) == 1


def classify(text: str, is_narrow: Callable[[str], bool] = is_single_byte) -> Alphabet:
    """Return WIDE if any character fails ``is_narrow``, NARROW otherwise."""
    for ch in text:
        if not is_narrow(ch):
            return Alphabet.WIDE
    return Alphabet.NARROW


def text_length(text: str, alphabet: Alphabet) -> int:
    """Length in UDL units: characters for 7-bit, UTF-16 code units for UCS-2."""
    if alphabet is Alphabet.WIDE:
        return len(text.encode("utf-16-le")) // 2
    return len(text)


def is_long(text: str, alphabet: Alphabet) -> bool:
    """True when ``text`` exceeds the single-frame budget."""
    return text_length(text, alphabet) > SINGLE_BUDGET[alphabet]


def unrepresentable_characters(text: str) -> list[tuple[int, str]]:
    """Characters the 7-bit packer would truncate, with their positions."""
    return [(pos, ch) for pos, ch in enumerate(text) if ord(ch) > 0x7F]
