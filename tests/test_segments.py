"""Tests for segment planning."""

import pytest

from pdugen.sms.alphabet import Alphabet
from pdugen.sms.errors import PduError
from pdugen.sms.segments import default_reference, plan


def fixed(value):
    return lambda: value


class TestPlan:
    def test_short_narrow_message(self):
        result = plan("hello", Alphabet.NARROW, fixed(9))
        assert result.segment_count == 1
        assert result.chars_per_segment == 160
        assert not result.is_segmented
        assert [(s.index, s.text) for s in result.segments] == [(1, "hello")]

    def test_short_wide_message(self):
        result = plan("Привет", Alphabet.WIDE, fixed(9))
        assert result.segment_count == 1
        assert result.chars_per_segment == 70

    @pytest.mark.parametrize(
        "length, alphabet, count, budget",
        [
            (160, Alphabet.NARROW, 1, 160),
            (161, Alphabet.NARROW, 2, 152),
            (300, Alphabet.NARROW, 2, 152),
            (304, Alphabet.NARROW, 2, 152),
            (305, Alphabet.NARROW, 3, 152),
            (70, Alphabet.WIDE, 1, 70),
            (71, Alphabet.WIDE, 2, 67),
            (140, Alphabet.WIDE, 3, 67),
        ],
    )
    def test_segment_counts(self, length, alphabet, count, budget):
        result = plan("x" * length, alphabet, fixed(1))
        assert result.segment_count == count
        assert result.chars_per_segment == budget
        assert len(result.segments) == count

    @pytest.mark.parametrize("length", [1, 152, 153, 161, 333, 1000])
    def test_segments_partition_text(self, length):
        text = "".join(chr(ord("a") + i % 26) for i in range(length))
        result = plan(text, Alphabet.NARROW, fixed(1))
        assert "".join(s.text for s in result.segments) == text
        assert [s.index for s in result.segments] == list(range(1, result.segment_count + 1))
        assert all(len(s.text) <= result.chars_per_segment for s in result.segments)

    def test_last_segment_holds_remainder(self):
        result = plan("y" * 161, Alphabet.NARROW, fixed(1))
        assert [len(s.text) for s in result.segments] == [152, 9]

    def test_empty_text_gives_one_empty_segment(self):
        result = plan("", Alphabet.NARROW, fixed(1))
        assert result.segment_count == 1
        assert result.segments[0].text == ""
        assert result.is_empty

    def test_reference_drawn_once(self):
        calls = []

        def source():
            calls.append(1)
            return 200

        result = plan("z" * 500, Alphabet.NARROW, source)
        assert result.reference_id == 200
        assert len(calls) == 1

    def test_surrogate_pair_is_not_split(self):
        text = "a" * 66 + "👍" + "b" * 10
        result = plan(text, Alphabet.WIDE, fixed(1))
        assert [s.text for s in result.segments] == ["a" * 66, "👍" + "b" * 10]

    def test_wide_budget_counts_utf16_units(self):
        assert plan("👍" * 35, Alphabet.WIDE, fixed(1)).segment_count == 1
        assert plan("👍" * 36, Alphabet.WIDE, fixed(1)).segment_count == 2

    def test_at_most_255_segments(self):
        assert plan("a" * (152 * 255), Alphabet.NARROW, fixed(1)).segment_count == 255
        with pytest.raises(PduError):
            plan("a" * (152 * 255 + 1), Alphabet.NARROW, fixed(1))

    @pytest.mark.parametrize("value", [0, 256, -1])
    def test_reference_out_of_range(self, value):
        with pytest.raises(ValueError):
            plan("hi", Alphabet.NARROW, fixed(value))


def test_default_reference_range():
    values = {default_reference() for _ in range(500)}
    assert all(1 <= v <= 255 for v in values)
