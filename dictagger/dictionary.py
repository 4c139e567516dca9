"""
Dictionary — Term/Class Lexicon

Loads TSV dictionaries (one ``term<TAB>class`` entry per line) and
exposes the terms in a stable order together with a lookup from a
term's index to its class.

Terms shorter than MIN_TERM_LENGTH characters are dropped at load
time; short terms match inside too many unrelated words.
"""

from __future__ import annotations

import glob
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Union

from dictagger.errors import DictionaryError
from dictagger.logging import get_logger

logger = get_logger("dictionary")

MIN_TERM_LENGTH = 8

PathLike = Union[str, Path]


@dataclass(frozen=True)
class DictionaryEntry:
    """A term and the class it is tagged with."""
    term: str
    label: str


def parse_entry(line: str, min_term_length: int = MIN_TERM_LENGTH):
    """
    Parse one TSV line. Returns None for lines without a tab or with a
    term below the minimum length. Only the first tab separates term
    from class.
    """
    line = line.rstrip("\r\n")
    if "\t" not in line:
        return None
    term, label = line.split("\t", 1)
    if len(term) < min_term_length:
        return None
    return DictionaryEntry(term=term, label=label)


def expand_globs(patterns: Iterable[PathLike]) -> list[Path]:
    """
    Expand glob patterns in order. A pattern without wildcards is kept
    as-is even when the file does not exist, so that the caller reports
    the missing file instead of silently ignoring it.
    """
    paths: list[Path] = []
    for pattern in patterns:
        pattern = str(pattern)
        if glob.has_magic(pattern):
            paths.extend(Path(p) for p in sorted(glob.glob(pattern)))
        else:
            paths.append(Path(pattern))
    return paths


class Dictionary:
    """
    Immutable, index-stable list of dictionary entries.

    Usage:
        dictionary = Dictionary.from_files(["dicts/*.tsv"])
        dictionary.terms()        # -> ["myocardial infarction", ...]
        dictionary.get_class(0)   # -> "DISEASE"
    """

    def __init__(self, entries: Iterable[DictionaryEntry] = ()):
        self._entries: tuple[DictionaryEntry, ...] = tuple(entries)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "Dictionary":
        """Build from (term, class) pairs without any length filtering."""
        return cls(DictionaryEntry(term=t, label=c) for t, c in pairs)

    @classmethod
    def from_file(
        cls, path: PathLike, min_term_length: int = MIN_TERM_LENGTH,
    ) -> "Dictionary":
        """Load a TSV dictionary file."""
        path = Path(path)
        logger.info(f"Loading dictionary from file {path}", extra={"path": str(path)})

        entries: list[DictionaryEntry] = []
        skipped = 0
        try:
            with path.open(encoding="utf-8") as handle:
                for line in handle:
                    entry = parse_entry(line, min_term_length)
                    if entry is None:
                        skipped += 1
                        continue
                    entries.append(entry)
        except (OSError, UnicodeDecodeError) as e:
            raise DictionaryError(path, str(e)) from e

        logger.info(
            "Dictionary loaded",
            extra={"path": str(path), "entries": len(entries), "skipped": skipped},
        )
        return cls(entries)

    @classmethod
    def from_files(
        cls,
        paths: Sequence[PathLike],
        min_term_length: int = MIN_TERM_LENGTH,
    ) -> "Dictionary":
        """Load and concatenate several dictionaries; glob patterns are expanded."""
        entries: list[DictionaryEntry] = []
        for path in expand_globs(paths):
            entries.extend(cls.from_file(path, min_term_length).entries)
        return cls(entries)

    @property
    def entries(self) -> tuple[DictionaryEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def terms(self) -> list[str]:
        return [e.term for e in self._entries]

    def classes(self) -> list[str]:
        """Unique classes, sorted."""
        return sorted({e.label for e in self._entries})

    def get_class(self, index: int) -> str:
        return self._entries[index].label
