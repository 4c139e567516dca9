"""
Span Segmenter

Turns the filtered match list of one line into a gapless sequence of
spans: each match becomes a TaggedSpan carrying its dictionary class,
and every stretch of text between matches becomes an UntaggedSpan.

Invariant: the spans are contiguous, the first starts at byte 0 and
the last ends at the byte length of the line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from dictagger.matcher import Match


class ClassLookup(Protocol):
    def get_class(self, index: int) -> str: ...


@dataclass(frozen=True)
class TaggedSpan:
    """A dictionary match: bytes [start, end) of the line and its class."""
    text: str
    start: int
    end: int
    label: str

    tagged = True


@dataclass(frozen=True)
class UntaggedSpan:
    """Text between (or around) dictionary matches."""
    text: str
    start: int
    end: int

    tagged = False


Span = Union[TaggedSpan, UntaggedSpan]


def _untagged(data: bytes, start: int, end: int) -> UntaggedSpan:
    return UntaggedSpan(data[start:end].decode("utf-8", errors="replace"), start, end)


def segment(
    matches: Sequence[Match],
    text: Union[str, bytes],
    classes: ClassLookup,
) -> list[Span]:
    """
    Build the span sequence for one line.

    Args:
        matches: Sorted, non-overlapping matches (Matcher + Boundary Filter output).
        text: The line the matches were found in.
        classes: Resolves a match's dictionary index to its class label.

    Returns:
        Spans covering every byte of ``text`` exactly once, in order.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text

    if not matches:
        return [_untagged(data, 0, len(data))]

    spans: list[Span] = []
    cursor = 0
    for match in matches:
        if match.start > cursor:
            spans.append(_untagged(data, cursor, match.start))
        spans.append(TaggedSpan(
            text=data[match.start:match.end].decode("utf-8", errors="replace"),
            start=match.start,
            end=match.end,
            label=classes.get_class(match.index),
        ))
        cursor = match.end

    if cursor < len(data):
        spans.append(_untagged(data, cursor, len(data)))

    return spans
