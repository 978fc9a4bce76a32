"""Exceptions raised while building or inspecting SMS PDUs."""

from __future__ import annotations


class PduError(ValueError):
    """Base class for PDU encoding and decoding failures."""


class InvalidNumberError(PduError):
    """The destination number contains no digits."""


class UnrepresentableCharacterError(PduError):
    def __init__(self, characters: list[tuple[int, str]]):
        self.characters = characters
        shown = ", ".join(f"{pos}:{ch!r}" for pos, ch in characters[:5])
        super().__init__(f"characters outside the 7-bit alphabet: {shown}")


class ModemError(RuntimeError):
    """The modem rejected a command or a PDU."""
