"""
Matcher — Multi-Pattern Search

Builds an Aho-Corasick automaton over the UTF-8 bytes of every
dictionary term and finds their occurrences in a line of text.

All offsets are byte offsets into the UTF-8 encoding of the input.
Case-insensitive matching folds ASCII letters only; non-ASCII bytes
are compared as-is.

Overlap resolution (MatchKind):
  - standard:         automaton-default order. The scan reports a match
                      as soon as a state with output is reached, so the
                      earliest-ending match wins; the scan then resumes
                      from the root at the match end.
  - leftmostfirst:    earliest start wins, ties go to the term that was
                      registered first.
  - leftmostlongest:  earliest start wins, ties go to the longest term.

Every policy returns matches sorted by start, never overlapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence, Union

from dictagger.logging import get_logger

logger = get_logger("matcher")


class MatchKind(str, Enum):
    """Overlap-resolution policy, chosen once when the Matcher is built."""

    STANDARD = "standard"
    LEFTMOST_FIRST = "leftmostfirst"
    LEFTMOST_LONGEST = "leftmostlongest"

    @classmethod
    def parse(cls, value: Union[str, "MatchKind"]) -> "MatchKind":
        """Accepts "leftmostlongest", "leftmost_longest", "Leftmost-Longest", ..."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "").replace("-", "")
        for kind in cls:
            if kind.value == key:
                return kind
        choices = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown match kind: {value!r} (expected one of {choices})")


@dataclass(frozen=True)
class Match:
    """A term occurrence: byte range [start, end) and the term's dictionary index."""
    start: int
    end: int
    index: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[int]:
        # Unpacks as (start, end, index)
        return iter((self.start, self.end, self.index))


class Matcher:
    """
    Aho-Corasick automaton over dictionary terms.

    The automaton is built once in the constructor and never mutated
    afterwards, so one Matcher can be shared by any number of callers.
    Term indices are the positions in the ``terms`` sequence; empty
    terms keep their slot but can never match.
    """

    def __init__(
        self,
        terms: Sequence[str],
        case_sensitive: bool = False,
        match_kind: Union[str, MatchKind] = MatchKind.LEFTMOST_LONGEST,
    ):
        self.case_sensitive = case_sensitive
        self.match_kind = MatchKind.parse(match_kind)
        self._patterns: tuple[bytes, ...] = tuple(
            self._fold(term.encode("utf-8")) for term in terms
        )

        # State 0 is the root. _goto holds trie edges keyed by byte value,
        # _out the term indices reported when a state is reached.
        self._goto: list[dict[int, int]] = [{}]
        self._fail: list[int] = [0]
        self._out: list[list[int]] = [[]]
        self._build()

        logger.debug(
            "Matcher built",
            extra={
                "terms": len(self._patterns),
                "match_kind": self.match_kind.value,
                "case_sensitive": case_sensitive,
            },
        )

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return (
            f"Matcher(terms={len(self._patterns)}, states={len(self._goto)}, "
            f"case_sensitive={self.case_sensitive}, match_kind={self.match_kind.value!r})"
        )

    # ------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------

    def _fold(self, data: bytes) -> bytes:
        # bytes.lower() only touches ASCII letters
        return data if self.case_sensitive else data.lower()

    def _build(self) -> None:
        # Trie
        for index, pattern in enumerate(self._patterns):
            if not pattern:
                continue
            state = 0
            for byte in pattern:
                nxt = self._goto[state].get(byte)
                if nxt is None:
                    nxt = len(self._goto)
                    self._goto[state][byte] = nxt
                    self._goto.append({})
                    self._fail.append(0)
                    self._out.append([])
                state = nxt
            self._out[state].append(index)

        # Failure links (BFS). A state's own terms stay ahead of the
        # inherited ones, so _out[s][0] is always the longest term ending there.
        queue: list[int] = list(self._goto[0].values())
        head = 0
        while head < len(queue):
            r = queue[head]
            head += 1
            for byte, s in self._goto[r].items():
                queue.append(s)
                f = self._fail[r]
                while f != 0 and byte not in self._goto[f]:
                    f = self._fail[f]
                self._fail[s] = self._goto[f].get(byte, 0)
                self._out[s].extend(self._out[self._fail[s]])

    def _step(self, state: int, byte: int) -> int:
        while state != 0 and byte not in self._goto[state]:
            state = self._fail[state]
        return self._goto[state].get(byte, 0)

    def _encode(self, text: Union[str, bytes]) -> bytes:
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        return self._fold(data)

    # ------------------------------------------------------------
    # Search
    # ------------------------------------------------------------

    def find_overlapping(self, text: Union[str, bytes]) -> list[Match]:
        """Every occurrence of every term, ordered by end offset."""
        data = self._encode(text)
        matches: list[Match] = []
        state = 0
        for pos, byte in enumerate(data):
            state = self._step(state, byte)
            for index in self._out[state]:
                end = pos + 1
                matches.append(Match(end - len(self._patterns[index]), end, index))
        return matches

    def find(self, text: Union[str, bytes]) -> list[Match]:
        """
        Non-overlapping occurrences resolved with the configured MatchKind.

        Args:
            text: One line of input. ``str`` is encoded as UTF-8; ``bytes``
                are taken as already encoded.

        Returns:
            Matches sorted by ascending start, no two overlapping.
        """
        if not self._patterns:
            return []
        if self.match_kind is MatchKind.STANDARD:
            return self._find_standard(self._encode(text))
        return self._find_leftmost(text)

    def _find_standard(self, data: bytes) -> list[Match]:
        matches: list[Match] = []
        state = 0
        for pos, byte in enumerate(data):
            state = self._step(state, byte)
            if self._out[state]:
                index = self._out[state][0]
                end = pos + 1
                matches.append(Match(end - len(self._patterns[index]), end, index))
                state = 0
        return matches

    def _find_leftmost(self, text: Union[str, bytes]) -> list[Match]:
        candidates = self.find_overlapping(text)
        if self.match_kind is MatchKind.LEFTMOST_FIRST:
            candidates.sort(key=lambda m: (m.start, m.index))
        else:
            candidates.sort(key=lambda m: (m.start, -m.length, m.index))

        selected: list[Match] = []
        cursor = 0
        for match in candidates:
            if match.start >= cursor:
                selected.append(match)
                cursor = match.end
        return selected
