"""
Scheme Tokenizer — IOB and BIOES Tagging

Splits every span on ASCII whitespace and assigns one tag per token.

IOB (3 labels):
  tagged span    → B-class, I-class, I-class, ...
  untagged span  → O for every token

BIOES (5 labels):
  tagged span, 1 token    → S-class
  tagged span, n tokens   → B-class, I-class, ..., E-class
  untagged span           → O for every token

Every tag carries the absolute byte range of its token in the
original line, so the line can be rebuilt from the tags.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from dictagger.segmenter import Span, TaggedSpan

# ASCII whitespace: space, \t, \n, \x0c, \r (vertical tab is not included)
_TOKEN = re.compile(rb"[^ \t\n\x0c\r]+")


class Scheme(str, Enum):
    IOB = "iob"
    BIOES = "bioes"

    @classmethod
    def parse(cls, value: Union[str, "Scheme"]) -> "Scheme":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown tagging scheme: {value!r} (expected iob or bioes)"
            ) from None


class TagKind(str, Enum):
    BEGINNING = "B"
    INSIDE = "I"
    OUTSIDE = "O"
    END = "E"
    SINGLE = "S"

    @property
    def prefix(self) -> str:
        return "O" if self is TagKind.OUTSIDE else f"{self.value}-"


@dataclass(frozen=True)
class Tag:
    """One token of the line with its chunk tag."""
    kind: TagKind
    text: str
    start: int
    end: int
    label: Optional[str] = None

    @property
    def tag(self) -> str:
        """Tag column value: "B-GENE", "O", ..."""
        if self.kind is TagKind.OUTSIDE:
            return "O"
        return f"{self.kind.prefix}{self.label}"

    def __str__(self) -> str:
        return f"{self.text} {self.tag}"


# --- Factories, one per tag kind ---

def beginning(text: str, start: int, end: int, label: str) -> Tag:
    return Tag(TagKind.BEGINNING, text, start, end, label)


def inside(text: str, start: int, end: int, label: str) -> Tag:
    return Tag(TagKind.INSIDE, text, start, end, label)


def outside(text: str, start: int, end: int) -> Tag:
    return Tag(TagKind.OUTSIDE, text, start, end)


def end(text: str, start: int, end: int, label: str) -> Tag:
    return Tag(TagKind.END, text, start, end, label)


def single(text: str, start: int, end: int, label: str) -> Tag:
    return Tag(TagKind.SINGLE, text, start, end, label)


# --- Tokenization ---

def tokenize(span: Span) -> list[tuple[str, int, int]]:
    """(token, absolute start, absolute end) for each whitespace-delimited token."""
    data = span.text.encode("utf-8")
    return [
        (m.group().decode("utf-8", errors="replace"),
         span.start + m.start(), span.start + m.end())
        for m in _TOKEN.finditer(data)
    ]


def iob_tags(span: Span) -> list[Tag]:
    tokens = tokenize(span)
    if not isinstance(span, TaggedSpan):
        return [outside(*token) for token in tokens]

    tags = []
    for position, token in enumerate(tokens):
        make = beginning if position == 0 else inside
        tags.append(make(*token, span.label))
    return tags


def bioes_tags(span: Span) -> list[Tag]:
    tokens = tokenize(span)
    if not isinstance(span, TaggedSpan):
        return [outside(*token) for token in tokens]

    if len(tokens) == 1:
        return [single(*tokens[0], span.label)]

    last = len(tokens) - 1
    tags = []
    for position, token in enumerate(tokens):
        if position == 0:
            make = beginning
        elif position == last:
            make = end
        else:
            make = inside
        tags.append(make(*token, span.label))
    return tags


_SCHEME_TAGGERS = {
    Scheme.IOB: iob_tags,
    Scheme.BIOES: bioes_tags,
}


def encode(spans: Iterable[Span], scheme: Union[str, Scheme] = Scheme.IOB) -> list[Tag]:
    """Flatten a line's spans into its tag sequence."""
    tagger = _SCHEME_TAGGERS[Scheme.parse(scheme)]
    tags: list[Tag] = []
    for span in spans:
        tags.extend(tagger(span))
    return tags


def reconstruct(text: Union[str, bytes], tags: Iterable[Tag]) -> str:
    """
    Rebuild the line from its tags, taking the separators from ``text``.

    Equals ``text`` whenever the tags cover all of its tokens.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    parts: list[bytes] = []
    cursor = 0
    for tag in tags:
        parts.append(data[cursor:tag.start])
        parts.append(tag.text.encode("utf-8"))
        cursor = tag.end
    parts.append(data[cursor:])
    return b"".join(parts).decode("utf-8", errors="replace")


def chunks(tags: Iterable[Tag]) -> list[tuple[str, list[Tag]]]:
    """Group tags into (label, tokens) chunks; works for both schemes."""
    result: list[tuple[str, list[Tag]]] = []
    for tag in tags:
        if tag.kind in (TagKind.BEGINNING, TagKind.SINGLE):
            result.append((tag.label, [tag]))
        elif tag.kind in (TagKind.INSIDE, TagKind.END) and result:
            result[-1][1].append(tag)
    return result
