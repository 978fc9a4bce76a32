"""Tests for 7-bit packing and UCS-2 encoding."""

import pytest

from pdugen.sms.errors import PduError
from pdugen.sms.packing import (
    decode_narrow,
    decode_wide,
    encode_narrow,
    encode_wide,
    pack_septets,
    swap_code_unit_bytes,
    unpack_septets,
)


class TestSeptets:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("hello", "E8329BFD06"),
            ("hi", "E834"),
            ("12345678", "31D98C56B3DD70"),
            ("", ""),
            ("A", "41"),
        ],
    )
    def test_encode_narrow(self, text, expected):
        assert encode_narrow(text) == expected

    def test_packed_length(self):
        for count in range(0, 40):
            assert len(pack_septets([0x55] * count)) == (count * 7 + 7) // 8

    @pytest.mark.parametrize("count", [1, 7, 8, 9, 15, 16, 17, 152, 160])
    def test_unpack_inverts_pack(self, count):
        units = [(i * 37 + 11) & 0x7F for i in range(count)]
        assert unpack_septets(pack_septets(units), count) == units

    def test_high_bit_is_dropped(self):
        assert encode_narrow("é") == encode_narrow(chr(0xE9 & 0x7F))
        assert decode_narrow(encode_narrow("café"), 4) == "cafi"

    def test_unpack_rejects_short_data(self):
        with pytest.raises(PduError):
            unpack_septets(b"\x00", 2)


class TestWide:
    def test_swap_code_unit_bytes(self):
        assert swap_code_unit_bytes(b"\x41\x00") == b"\x00\x41"
        assert swap_code_unit_bytes(b"\x1f\x04\x40\x04") == b"\x04\x1f\x04\x40"
        assert swap_code_unit_bytes(b"") == b""

    def test_swap_rejects_odd_length(self):
        with pytest.raises(PduError):
            swap_code_unit_bytes(b"\x00\x41\x00")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("A", "0041"),
            ("€", "20AC"),
            ("Привет", "041F04400438043204350442"),
        ],
    )
    def test_encode_wide_is_big_endian(self, text, expected):
        assert encode_wide(text) == expected

    def test_decode_wide(self):
        assert decode_wide("041F04400438043204350442") == "Привет"
