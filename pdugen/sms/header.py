"""Fixed SMS-SUBMIT header fields and the concatenation header."""

from __future__ import annotations

from typing import List, NamedTuple

from pdugen.sms.alphabet import Alphabet, text_length

SERVICE_CENTRE = "00"  # use the SMSC stored on the SIM
PROTOCOL_ID = "00"
VALIDITY_PERIOD = ""  # TP-VPF is 00, field absent


class ConcatLayout(NamedTuple):
    udhl: int
    iei: int
    iedl: int
    reference_width: int  # octets


# 7-bit frames use the 16-bit reference element so that the 7 octet header
# ends on a septet boundary (8 septets) and the text needs no fill bits.
CONCAT_LAYOUT = {
    Alphabet.NARROW: ConcatLayout(udhl=6, iei=0x08, iedl=4, reference_width=2),
    Alphabet.WIDE: ConcatLayout(udhl=5, iei=0x00, iedl=3, reference_width=1),
}

# Header size in UDL units: septets for 7-bit, octets for UCS-2.
UDH_OVERHEAD = {Alphabet.NARROW: 8, Alphabet.WIDE: 3 * 2}


def _pack(bits: List[int]) -> str:
    return f"{int(''.join(str(b) for b in bits), 2):02X}"


def build_flags(segmented: bool, report: bool) -> str:
    """First octet of an SMS-SUBMIT."""
    bits = [
        0,  # TP-RP
        int(segmented),  # TP-UDHI
        int(report),  # TP-SRR
        0,  # TP-RD
        0, 0,  # TP-VPF
        0, 1,  # TP-MTI
    ]
    return _pack(bits)


def build_message_reference(index: int) -> str:
    """TP-MR for the 1-based segment index."""
    return f"{index - 1:02X}"


def build_dcs(flash: bool, alphabet: Alphabet) -> str:
    """TP-DCS as two decimal characters: flash digit, then 8 for UCS-2.

    The digits are concatenated rather than OR-ed into a bit field, giving
    00, 08, 10 or 18.
    """
    return str(int(flash)) + ("8" if alphabet is Alphabet.WIDE else "0")


def build_udl(text: str, alphabet: Alphabet, segmented: bool) -> str:
    """TP-UDL: septets for 7-bit, octets for UCS-2, header included."""
    size = text_length(text, alphabet)
    if alphabet is Alphabet.WIDE:
        size *= 2
    if segmented:
        size += UDH_OVERHEAD[alphabet]
    return f"{size:02X}"


def build_udh(reference_id: int, index: int, count: int, alphabet: Alphabet) -> str:
    """Concatenation header for one segment, layout taken from CONCAT_LAYOUT."""
    layout = CONCAT_LAYOUT[alphabet]
    width = layout.reference_width * 2
    return (
        f"{layout.udhl:02X}"
        f"{layout.iei:02X}"
        f"{layout.iedl:02X}"
        f"{reference_id:0{width}X}"
        f"{count:02X}"
        f"{index:02X}"
    )
