"""
Error types raised by dictagger.

Everything derives from DictaggerError so callers (CLI, API) can
catch package failures in one place.
"""

from __future__ import annotations


class DictaggerError(Exception):
    """Base class for all dictagger errors."""


class MissingDictionaryError(DictaggerError):
    """Raised when a Tagger is built without a dictionary."""

    def __init__(self, message: str = "A Tagger can't be built without a dictionary"):
        super().__init__(message)


class DictionaryError(DictaggerError):
    """Raised when a dictionary file cannot be read."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load dictionary {self.path}: {reason}")
