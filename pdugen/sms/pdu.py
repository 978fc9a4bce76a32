"""SMS-SUBMIT PDU assembly, with segmentation, and inspection of the result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from pdugen.sms.address import INTERNATIONAL, encode_address, swap_semi_octets
from pdugen.sms.alphabet import Alphabet, classify, is_single_byte, unrepresentable_characters
from pdugen.sms.errors import PduError, UnrepresentableCharacterError
from pdugen.sms.header import (
    PROTOCOL_ID,
    SERVICE_CENTRE,
    VALIDITY_PERIOD,
    build_dcs,
    build_flags,
    build_message_reference,
    build_udh,
    build_udl,
)
from pdugen.sms.packing import decode_narrow, decode_wide, encode_narrow, encode_wide
from pdugen.sms.segments import ReferenceSource, SegmentPlan, default_reference, plan


@dataclass(frozen=True)
class OutgoingMessage:
    number: str
    text: str
    flash: bool = False
    report: bool = False


def _encode_text(text: str, alphabet: Alphabet) -> str:
    if alphabet is Alphabet.WIDE:
        return encode_wide(text)
    return encode_narrow(text)


def _assemble(
    message: OutgoingMessage,
    reference_source: ReferenceSource,
    is_narrow: Callable[[str], bool],
    strict: bool,
) -> Tuple[SegmentPlan, List[str]]:
    address = encode_address(message.number)
    alphabet = classify(message.text, is_narrow)
    if strict and alphabet is Alphabet.NARROW:
        bad = unrepresentable_characters(message.text)
        if bad:
            raise UnrepresentableCharacterError(bad)
    segments = plan(message.text, alphabet, reference_source)
    if segments.is_empty:
        logging.debug("empty message, sending a single empty frame")
    dcs = build_dcs(message.flash, alphabet)
    frames: List[str] = []
    for seg in segments.segments:
        udh = ""
        if segments.is_segmented:
            udh = build_udh(
                segments.reference_id, seg.index, segments.segment_count, alphabet
            )
        frame = (
            SERVICE_CENTRE
            + build_flags(segments.is_segmented, message.report)
            + build_message_reference(seg.index)
            + address
            + PROTOCOL_ID
            + dcs
            + VALIDITY_PERIOD
            + build_udl(seg.text, alphabet, segments.is_segmented)
            + udh
            + _encode_text(seg.text, alphabet)
        )
        logging.debug(
            "built PDU %d/%d (%s, %d octets)",
            seg.index,
            segments.segment_count,
            alphabet.value,
            len(frame) // 2,
        )
        frames.append(frame)
    return segments, frames


def generate(
    message: OutgoingMessage,
    reference_source: ReferenceSource = default_reference,
    is_narrow: Callable[[str], bool] = is_single_byte,
    strict: bool = False,
) -> List[str]:
    """Return one hex SMS-SUBMIT frame per segment of ``message``.

    ``strict`` rejects 7-bit messages containing characters above U+007F
    instead of truncating them; it only matters with a custom ``is_narrow``
    predicate, since the default one sends such text as UCS-2.
    """
    _, frames = _assemble(message, reference_source, is_narrow, strict)
    return frames


def build_pdus(
    number: str,
    text: str,
    flash: bool = False,
    report: bool = False,
    reference_source: ReferenceSource = default_reference,
) -> list[dict[str, object]]:
    """Build PDUs for the given text with the metadata a modem needs."""
    message = OutgoingMessage(number=number, text=text, flash=flash, report=report)
    segments, frames = _assemble(message, reference_source, is_single_byte, False)
    return [
        {
            "pdu": frame,
            "tpdu_length": len(frame) // 2 - 1,
            "seg_total": segments.segment_count,
            "seg_index": seg.index,
            "text": seg.text,
            "alphabet": segments.alphabet.value,
        }
        for seg, frame in zip(segments.segments, frames)
    ]


def _parse_udh(header: bytes) -> dict[str, int] | None:
    i = 0
    while i + 2 <= len(header):
        iei, iedl = header[i], header[i + 1]
        data = header[i + 2 : i + 2 + iedl]
        if len(data) != iedl:
            raise PduError("truncated user data header")
        if iei == 0x00 and iedl == 3:
            return {"reference_id": data[0], "total": data[1], "index": data[2]}
        if iei == 0x08 and iedl == 4:
            return {
                "reference_id": (data[0] << 8) | data[1],
                "total": data[2],
                "index": data[3],
            }
        i += 2 + iedl
    return None


def _parse(pdu: str) -> dict[str, object]:
    i = 0
    smsc_len = int(pdu[i : i + 2], 16)
    i += 2 + smsc_len * 2
    first = int(pdu[i : i + 2], 16)
    i += 2
    reference = int(pdu[i : i + 2], 16)
    i += 2
    addr_len = int(pdu[i : i + 2], 16)
    i += 2
    toa = pdu[i : i + 2]
    i += 2
    addr_field_len = addr_len + (addr_len % 2)
    number = swap_semi_octets(pdu[i : i + addr_field_len])
    i += addr_field_len
    if toa == INTERNATIONAL:
        number = "+" + number
    pid = pdu[i : i + 2]
    i += 2
    dcs = pdu[i : i + 2]
    i += 2
    vpf = (first >> 3) & 0x03
    if vpf == 2:
        i += 2
    elif vpf in (1, 3):
        i += 14
    udl = int(pdu[i : i + 2], 16)
    i += 2
    ud = bytes.fromhex(pdu[i:])
    wide = bool(int(dcs, 16) & 0x08)

    udh = None
    skip = 0
    if first & 0x40:
        udhl = ud[0]
        udh = _parse_udh(ud[1 : 1 + udhl])
        skip = udhl + 1
    if wide:
        if len(ud) != udl:
            raise PduError(f"user data is {len(ud)} octets, UDL says {udl}")
        text = decode_wide(ud[skip:].hex())
    else:
        header_septets = (skip * 8 + 6) // 7
        text = decode_narrow(ud.hex(), udl)[header_septets:]
    return {
        "number": number,
        "flags": first,
        "report": bool(first & 0x20),
        "reference": reference,
        "pid": pid,
        "dcs": dcs,
        "udl": udl,
        "udh": udh,
        "text": text,
    }


def parse_submit(pdu: str) -> dict[str, object]:
    """Decode an SMS-SUBMIT frame produced by :func:`generate`."""
    try:
        return _parse(pdu.strip())
    except PduError:
        raise
    except (ValueError, IndexError) as exc:
        raise PduError(f"malformed PDU: {exc}") from exc
