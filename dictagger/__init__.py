"""
dictagger — Dictionary-Based Chunk Tagger

Tags free text against a dictionary of known terms and emits one
IOB or BIOES tag per whitespace-delimited token.

Public API:
  - Dictionary:  TSV term/class lexicon (index-stable)
  - Matcher:     Aho-Corasick multi-term search with overlap policies
  - Tagger:      Matcher + boundary filter + segmenter, built once per run
  - encode:      Span sequence → IOB/BIOES tag sequence
  - Scheme, Tag, TagKind, MatchKind

Usage:
    from dictagger import Dictionary, Tagger
    tagger = Tagger(Dictionary.from_file("genes.tsv"))
    for tag in tagger.annotate("the p53 tumor suppressor", scheme="bioes"):
        print(tag)
"""

__version__ = "0.3.0"

from dictagger.dictionary import Dictionary, DictionaryEntry, MIN_TERM_LENGTH
from dictagger.errors import DictaggerError, DictionaryError, MissingDictionaryError
from dictagger.matcher import Match, Matcher, MatchKind
from dictagger.boundary import filter_word_matches, is_word_boundary
from dictagger.segmenter import Span, TaggedSpan, UntaggedSpan, segment
from dictagger.schemes import Scheme, Tag, TagKind, encode, reconstruct
from dictagger.tagger import Tagger, build_tagger

__all__ = [
    "Dictionary",
    "DictionaryEntry",
    "MIN_TERM_LENGTH",
    "DictaggerError",
    "DictionaryError",
    "MissingDictionaryError",
    "Match",
    "Matcher",
    "MatchKind",
    "filter_word_matches",
    "is_word_boundary",
    "Span",
    "TaggedSpan",
    "UntaggedSpan",
    "segment",
    "Scheme",
    "Tag",
    "TagKind",
    "encode",
    "reconstruct",
    "Tagger",
    "build_tagger",
]
