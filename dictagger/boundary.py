"""
Boundary Filter — Whole-Word Match Validation

Drops matches that sit inside a longer word. A match is kept only
when the character just before its start and the character just after
its end are each either absent (start/end of line) or a word boundary:
whitespace or ASCII punctuation.

Offsets are UTF-8 byte offsets. An offset that falls inside a
multi-byte character is snapped outward to the nearest character
boundary instead of failing.
"""

from __future__ import annotations

import string
from typing import Iterable, Optional, Union

from dictagger.matcher import Match

_ASCII_PUNCTUATION = frozenset(string.punctuation)


def is_word_boundary(char: str) -> bool:
    """True for whitespace and ASCII punctuation."""
    return char.isspace() or char in _ASCII_PUNCTUATION


def _is_continuation(byte: int) -> bool:
    # UTF-8 continuation bytes look like 0b10xxxxxx
    return byte & 0xC0 == 0x80


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def previous_char(data: bytes, index: int) -> Optional[str]:
    """The character ending at byte ``index``, or None at the start of input."""
    index = min(index, len(data))
    while 0 < index < len(data) and _is_continuation(data[index]):
        index -= 1
    if index <= 0:
        return None

    start = index - 1
    while start > 0 and _is_continuation(data[start]):
        start -= 1
    decoded = _decode(data[start:index])
    return decoded[-1] if decoded else None


def next_char(data: bytes, index: int) -> Optional[str]:
    """The character starting at byte ``index``, or None at the end of input."""
    index = max(index, 0)
    while index < len(data) and _is_continuation(data[index]):
        index += 1
    if index >= len(data):
        return None

    end = index + 1
    while end < len(data) and _is_continuation(data[end]):
        end += 1
    decoded = _decode(data[index:end])
    return decoded[0] if decoded else None


def is_word_match(data: bytes, start: int, end: int) -> bool:
    before = previous_char(data, start)
    after = next_char(data, end)
    if before is not None and not is_word_boundary(before):
        return False
    if after is not None and not is_word_boundary(after):
        return False
    return True


def filter_word_matches(
    matches: Iterable[Match], text: Union[str, bytes],
) -> list[Match]:
    """
    Keep the matches that are aligned on word boundaries.

    Order is preserved; the result is always a subsequence of ``matches``.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    return [m for m in matches if is_word_match(data, m.start, m.end)]
