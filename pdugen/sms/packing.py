"""User data encoders: packed 7-bit septets and UCS-2."""

from __future__ import annotations

from typing import Iterable, List

from pdugen.sms.errors import PduError


def pack_septets(units: Iterable[int]) -> bytes:
    """Pack 7-bit units into octets.

    Unit ``k`` occupies bits ``7k`` to ``7k + 6`` of a little-endian bit
    stream, so each octet holds the remainder of one unit in its low bits
    and the start of the next unit in its high bits. The last octet is
    zero padded.
    """
    units = list(units)
    data = bytearray((len(units) * 7 + 7) // 8)
    for k, unit in enumerate(units):
        unit &= 0x7F
        offset = 7 * k
        byte, shift = divmod(offset, 8)
        data[byte] |= (unit << shift) & 0xFF
        if shift > 1:
            data[byte + 1] |= unit >> (8 - shift)
    return bytes(data)


def unpack_septets(data: bytes, count: int) -> List[int]:
    if count * 7 > len(data) * 8:
        raise PduError(f"{len(data)} octets cannot hold {count} septets")
    units: List[int] = []
    for k in range(count):
        byte, shift = divmod(7 * k, 8)
        unit = data[byte] >> shift
        if shift > 1:
            unit |= data[byte + 1] << (8 - shift)
        units.append(unit & 0x7F)
    return units


def encode_narrow(text: str) -> str:
    # No GSM 03.38 table lookup: the 7-bit value is the ASCII code point.
    return pack_septets(ord(ch) & 0x7F for ch in text).hex().upper()


def decode_narrow(hex_data: str, count: int) -> str:
    return "".join(chr(u) for u in unpack_septets(bytes.fromhex(hex_data), count))


def swap_code_unit_bytes(data: bytes) -> bytes:
    """Swap the two bytes of every 16-bit code unit."""
    if len(data) % 2:
        raise PduError("odd number of bytes in UCS-2 data")
    swapped = bytearray(len(data))
    swapped[0::2] = data[1::2]
    swapped[1::2] = data[0::2]
    return bytes(swapped)


def encode_wide(text: str) -> str:
    """UCS-2 user data, most significant byte of each unit first."""
    native = text.encode("utf-16-le")
    return swap_code_unit_bytes(native).hex().upper()


def decode_wide(hex_data: str) -> str:
    return swap_code_unit_bytes(bytes.fromhex(hex_data)).decode("utf-16-le")
