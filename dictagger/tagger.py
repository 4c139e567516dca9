"""
Tagger — Dictionary Tagging Pipeline

Wires the pipeline stages together for one line of text:

    Matcher.find → filter_word_matches → segment → encode

A Tagger is built once per run from a Dictionary and a configuration
(case sensitivity, word matching, match kind). It keeps no per-call
state, so one instance can tag any number of lines, in any order.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Union

from dictagger.boundary import filter_word_matches
from dictagger.dictionary import Dictionary
from dictagger.errors import MissingDictionaryError
from dictagger.logging import get_logger
from dictagger.matcher import Match, Matcher, MatchKind
from dictagger.schemes import Scheme, Tag, encode
from dictagger.segmenter import Span, segment

logger = get_logger("tagger")


class Tagger:
    """
    Tags text with the classes of a dictionary.

    Args:
        dictionary: Source of terms and classes. Required.
        case_sensitive: When False (default), ASCII letters match regardless of case.
        word_matching: When True (default), matches must sit on word boundaries.
        match_kind: Overlap policy, see MatchKind. Defaults to leftmost-longest.

    Raises:
        MissingDictionaryError: if ``dictionary`` is None.
    """

    def __init__(
        self,
        dictionary: Optional[Dictionary],
        case_sensitive: bool = False,
        word_matching: bool = True,
        match_kind: Union[str, MatchKind] = MatchKind.LEFTMOST_LONGEST,
    ):
        if dictionary is None:
            raise MissingDictionaryError()

        self.dictionary = dictionary
        self.word_matching = word_matching

        logger.info(
            "Building Tagger (Aho-Corasick automaton)",
            extra={"terms": len(dictionary)},
        )
        self.matcher = Matcher(
            dictionary.terms(),
            case_sensitive=case_sensitive,
            match_kind=match_kind,
        )
        logger.info(
            "Tagger built",
            extra={
                "match_kind": self.matcher.match_kind.value,
                "case_sensitive": case_sensitive,
                "word_matching": word_matching,
            },
        )

    @property
    def case_sensitive(self) -> bool:
        return self.matcher.case_sensitive

    @property
    def match_kind(self) -> MatchKind:
        return self.matcher.match_kind

    def find(self, text: str) -> list[Match]:
        """Matches kept after boundary filtering (if enabled)."""
        return self._find(text.encode("utf-8"))

    def _find(self, data: bytes) -> list[Match]:
        matches = self.matcher.find(data)
        if self.word_matching:
            matches = filter_word_matches(matches, data)
        return matches

    def tag(self, text: str) -> list[Span]:
        """Chunk-level spans covering the whole line."""
        data = text.encode("utf-8")
        return segment(self._find(data), data, self.dictionary)

    def annotate(self, text: str, scheme: Union[str, Scheme] = Scheme.IOB) -> list[Tag]:
        """Token-level tags for one line in the given scheme."""
        return encode(self.tag(text), scheme)

    def annotate_lines(
        self, lines: Iterable[str], scheme: Union[str, Scheme] = Scheme.IOB,
    ) -> Iterator[list[Tag]]:
        """Tag each line independently."""
        scheme = Scheme.parse(scheme)
        for line in lines:
            yield self.annotate(line, scheme)


def build_tagger(settings, dictionary: Optional[Dictionary] = None) -> Tagger:
    """
    Factory — builds a Tagger from Settings.

    Loads the dictionaries named by ``settings.DICTIONARIES`` unless a
    dictionary is passed in.
    """
    if dictionary is None:
        patterns = settings.dictionary_patterns
        if not patterns:
            raise MissingDictionaryError(
                "No dictionary configured (set DICTAGGER_DICTIONARIES)"
            )
        dictionary = Dictionary.from_files(patterns, settings.MIN_TERM_LENGTH)

    return Tagger(
        dictionary,
        case_sensitive=settings.CASE_SENSITIVE,
        word_matching=settings.WORD_MATCHING,
        match_kind=settings.MATCH_KIND,
    )


def iter_lines(content: str) -> Iterator[str]:
    """Lines without their terminator; "\\r\\n" and "\\n" both end a line."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line
