"""
Tagger Tests — end-to-end behaviour of the tagging pipeline.

Dictionaries are built with Dictionary.from_pairs, which skips the
loader's minimum term length, so short terms can be exercised directly.
"""

from types import SimpleNamespace

import pytest

from dictagger import (
    Dictionary,
    MissingDictionaryError,
    Tagger,
    TaggedSpan,
    UntaggedSpan,
    build_tagger,
    reconstruct,
)
from dictagger.schemes import TagKind
from dictagger.tagger import iter_lines


def _tags(tagger, text, scheme):
    return [(t.text, t.tag) for t in tagger.annotate(text, scheme)]


# ============================================================
# CONSTRUCTION
# ============================================================

class TestConstruction:

    def test_missing_dictionary_fails_fast(self):
        with pytest.raises(MissingDictionaryError):
            Tagger(None)

    def test_empty_dictionary_is_legal(self):
        tagger = Tagger(Dictionary())
        assert _tags(tagger, "nothing here", "bioes") == [("nothing", "O"), ("here", "O")]

    def test_configuration_is_exposed(self, medical_dictionary):
        tagger = Tagger(medical_dictionary, case_sensitive=True, word_matching=False,
                        match_kind="leftmostfirst")
        assert tagger.case_sensitive is True
        assert tagger.word_matching is False
        assert tagger.match_kind.value == "leftmostfirst"

    def test_unknown_match_kind(self, medical_dictionary):
        with pytest.raises(ValueError):
            Tagger(medical_dictionary, match_kind="greedy")


# ============================================================
# TAGGING BEHAVIOUR
# ============================================================

class TestTagging:

    def test_boundary_rejection(self):
        tagger = Tagger(Dictionary.from_pairs([("diagnosis", "CONDITION")]))
        assert tagger.find("prediagnosis report") == []
        assert _tags(tagger, "prediagnosis report", "bioes") == [
            ("prediagnosis", "O"), ("report", "O"),
        ]

    def test_exact_word_match(self):
        tagger = Tagger(Dictionary.from_pairs([("diagnosis", "CONDITION")]))
        text = "initial diagnosis confirmed"
        assert _tags(tagger, text, "bioes")[1] == ("diagnosis", "S-CONDITION")
        assert _tags(tagger, text, "iob")[1] == ("diagnosis", "B-CONDITION")

    def test_multi_word_chunk(self):
        tagger = Tagger(Dictionary.from_pairs([("heart attack", "CONDITION")]))
        text = "patient had heart attack yesterday"
        assert _tags(tagger, text, "bioes") == [
            ("patient", "O"), ("had", "O"),
            ("heart", "B-CONDITION"), ("attack", "E-CONDITION"),
            ("yesterday", "O"),
        ]
        assert _tags(tagger, text, "iob")[2:4] == [
            ("heart", "B-CONDITION"), ("attack", "I-CONDITION"),
        ]

    def test_leftmost_longest_tie_break(self):
        dictionary = Dictionary.from_pairs([("heart", "ORGAN"), ("heart attack", "CONDITION")])
        tagger = Tagger(dictionary, match_kind="leftmostlongest")
        spans = tagger.tag("heart attack pain")
        assert spans[0] == TaggedSpan("heart attack", 0, 12, "CONDITION")

    def test_leftmost_first_tie_break(self):
        dictionary = Dictionary.from_pairs([("heart", "ORGAN"), ("heart attack", "CONDITION")])
        tagger = Tagger(dictionary, match_kind="leftmostfirst")
        assert _tags(tagger, "heart attack pain", "bioes") == [
            ("heart", "S-ORGAN"), ("attack", "O"), ("pain", "O"),
        ]

    def test_case_insensitive(self):
        tagger = Tagger(Dictionary.from_pairs([("Flu", "DISEASE")]))
        assert _tags(tagger, "the flu spread", "bioes")[1] == ("flu", "S-DISEASE")

    def test_case_sensitive(self):
        tagger = Tagger(Dictionary.from_pairs([("Flu", "DISEASE")]), case_sensitive=True)
        assert all(tag == "O" for _, tag in _tags(tagger, "the flu spread", "bioes"))

    def test_word_matching_disabled(self):
        tagger = Tagger(Dictionary.from_pairs([("diagnosis", "CONDITION")]), word_matching=False)
        assert tagger.tag("prediagnosis report") == [
            UntaggedSpan("pre", 0, 3),
            TaggedSpan("diagnosis", 3, 12, "CONDITION"),
            UntaggedSpan(" report", 12, 19),
        ]
        assert _tags(tagger, "prediagnosis report", "bioes") == [
            ("pre", "O"), ("diagnosis", "S-CONDITION"), ("report", "O"),
        ]

    def test_punctuation_around_chunk(self, medical_dictionary):
        tagger = Tagger(medical_dictionary)
        assert _tags(tagger, "(diagnosis)", "iob") == [
            ("(", "O"), ("diagnosis", "B-CONDITION"), (")", "O"),
        ]

    def test_offsets_of_later_chunks_are_absolute(self, medical_dictionary):
        tagger = Tagger(medical_dictionary)
        tags = tagger.annotate("the diagnosis and the diagnosis", "bioes")
        assert (tags[4].text, tags[4].start, tags[4].end) == ("diagnosis", 22, 31)
        assert tags[4].kind is TagKind.SINGLE

    def test_several_classes_in_one_line(self, medical_dictionary):
        tagger = Tagger(medical_dictionary)
        tags = tagger.annotate("heart attack treated with aspirin tablet", "bioes")
        assert [t.tag for t in tags] == [
            "B-CONDITION", "E-CONDITION", "O", "O", "B-DRUG", "E-DRUG",
        ]


# ============================================================
# INVARIANTS
# ============================================================

class TestInvariants:

    @pytest.mark.parametrize("text", [
        "patient had heart attack yesterday",
        "  heart   attack\tand  diagnosis  ",
        "café diagnosis — naïve heart attack.",
        "prediagnosis report",
        "",
        "   ",
        "diagnosis",
    ])
    @pytest.mark.parametrize("scheme", ["iob", "bioes"])
    def test_coverage(self, medical_dictionary, text, scheme):
        tagger = Tagger(medical_dictionary)
        assert reconstruct(text, tagger.annotate(text, scheme)) == text

    @pytest.mark.parametrize("text", ["heart attack pain", "", "café diagnosis"])
    def test_spans_are_gapless(self, medical_dictionary, text):
        spans = Tagger(medical_dictionary).tag(text)
        assert spans[0].start == 0
        assert spans[-1].end == len(text.encode("utf-8"))
        for left, right in zip(spans, spans[1:]):
            assert left.end == right.start

    def test_no_match_means_all_outside(self, medical_dictionary):
        tags = Tagger(medical_dictionary).annotate("nothing relevant in this line", "bioes")
        assert tags
        assert all(t.kind is TagKind.OUTSIDE for t in tags)

    def test_repeatable(self, medical_dictionary):
        tagger = Tagger(medical_dictionary)
        text = "heart attack and diagnosis"
        assert tagger.annotate(text, "bioes") == tagger.annotate(text, "bioes")


# ============================================================
# HELPERS
# ============================================================

class TestAnnotateLines:

    def test_each_line_is_independent(self, medical_dictionary):
        tagger = Tagger(medical_dictionary)
        results = list(tagger.annotate_lines(["heart", "attack", "heart attack"], "bioes"))
        assert [[t.tag for t in tags] for tags in results] == [
            ["O"], ["O"], ["B-CONDITION", "E-CONDITION"],
        ]


class TestIterLines:

    @pytest.mark.parametrize("content,expected", [
        ("a\nb\n", ["a", "b"]),
        ("a\r\nb", ["a", "b"]),
        ("a\n\nb", ["a", "", "b"]),
        ("", []),
        ("\n", [""]),
    ])
    def test_split(self, content, expected):
        assert list(iter_lines(content)) == expected


class TestBuildTagger:

    def _settings(self, **overrides):
        values = dict(
            dictionary_patterns=[],
            MIN_TERM_LENGTH=8,
            CASE_SENSITIVE=False,
            WORD_MATCHING=True,
            MATCH_KIND="leftmostlongest",
        )
        values.update(overrides)
        return SimpleNamespace(**values)

    def test_loads_configured_dictionaries(self, tmp_path):
        path = tmp_path / "terms.tsv"
        path.write_text("heart attack\tCONDITION\nflu\tDISEASE\n", encoding="utf-8")
        tagger = build_tagger(self._settings(
            dictionary_patterns=[str(path)], MATCH_KIND="standard",
        ))
        assert len(tagger.dictionary) == 1
        assert tagger.match_kind.value == "standard"

    def test_no_dictionary_configured(self):
        with pytest.raises(MissingDictionaryError):
            build_tagger(self._settings())

    def test_explicit_dictionary_wins(self, medical_dictionary):
        tagger = build_tagger(self._settings(), dictionary=medical_dictionary)
        assert tagger.dictionary is medical_dictionary
