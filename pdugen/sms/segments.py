"""Splitting message text into concatenated SMS segments."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List, Tuple

from pdugen.sms.alphabet import (
    SEGMENT_BUDGET,
    SINGLE_BUDGET,
    Alphabet,
    is_long,
    text_length,
)
from pdugen.sms.errors import PduError

ReferenceSource = Callable[[], int]

MAX_SEGMENTS = 255  # total and index are single octets in the UDH


def default_reference() -> int:
    return random.randint(1, 255)


@dataclass(frozen=True)
class Segment:
    index: int
    text: str


@dataclass(frozen=True)
class SegmentPlan:
    alphabet: Alphabet
    segment_count: int
    chars_per_segment: int
    reference_id: int
    segments: Tuple[Segment, ...]

    @property
    def is_segmented(self) -> bool:
        return self.segment_count > 1

    @property
    def is_empty(self) -> bool:
        return not any(seg.text for seg in self.segments)


def _split(text: str, alphabet: Alphabet, budget: int) -> List[str]:
    # Characters above U+FFFF take two UTF-16 units and are never split.
    chunks: List[str] = []
    start = used = 0
    for pos, ch in enumerate(text):
        size = text_length(ch, alphabet)
        if used + size > budget:
            chunks.append(text[start:pos])
            start, used = pos, 0
        used += size
    chunks.append(text[start:])
    return chunks


def plan(
    text: str,
    alphabet: Alphabet,
    reference_source: ReferenceSource = default_reference,
) -> SegmentPlan:
    """Work out how ``text`` is split across frames.

    A message that fits the single-frame budget (160 septets or 70 UTF-16
    units) is sent whole. Longer messages are cut into chunks of the
    segmented budget, which leaves room for the concatenation header. The
    reference id is drawn once and shared by every segment.
    """
    if is_long(text, alphabet):
        budget = SEGMENT_BUDGET[alphabet]
    else:
        budget = SINGLE_BUDGET[alphabet]
    chunks = _split(text, alphabet, budget)
    if len(chunks) > MAX_SEGMENTS:
        raise PduError(
            f"message needs {len(chunks)} segments, at most {MAX_SEGMENTS} allowed"
        )
    reference_id = reference_source()
    if not 1 <= reference_id <= 255:
        raise ValueError(f"reference id out of range: {reference_id}")
    segments = tuple(
        Segment(index=part, text=chunk) for part, chunk in enumerate(chunks, start=1)
    )
    return SegmentPlan(
        alphabet=alphabet,
        segment_count=len(segments),
        chars_per_segment=budget,
        reference_id=reference_id,
        segments=segments,
    )
