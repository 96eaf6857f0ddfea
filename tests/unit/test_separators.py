import pytest

from splitter_service.config.splitting.models import SplitConfig
from splitter_service.errors import UnsupportedLanguage
from splitter_service.services.splitting.separators import (
    DEFAULT_SEPARATORS,
    Language,
    SeparatorMatcher,
    parse_language,
    resolve_separators,
    separators_for_config,
    supported_languages,
)


def test_default_separators():
    resolved = resolve_separators()
    assert resolved.separators == ("\n\n", "\n", " ", "")
    assert resolved.is_regex is False
    assert resolved.language is None


def test_python_table():
    resolved = resolve_separators("python")
    assert resolved.is_regex is True
    assert resolved.language is Language.PYTHON
    assert resolved.separators[:2] == ("\nclass ", "\ndef ")


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("PY", Language.PYTHON),
        ("md", Language.MARKDOWN),
        (" TypeScript ", Language.TS),
        ("c++", Language.CPP),
        (Language.GO, Language.GO),
        ("", None),
        (None, None),
        ("klingon", None),
    ],
)
def test_parse_language(tag, expected):
    assert parse_language(tag) is expected


def test_every_table_ends_with_character_fallback():
    for tag in supported_languages():
        assert resolve_separators(tag).separators[-1] == ""


def test_unknown_language_falls_back_silently():
    assert resolve_separators("klingon").separators == DEFAULT_SEPARATORS


def test_unknown_language_strict():
    with pytest.raises(UnsupportedLanguage) as exc:
        resolve_separators("klingon", strict=True)
    assert exc.value.language == "klingon"


def test_explicit_separators_win_over_language():
    cfg = SplitConfig(chunk_size=10, chunk_overlap=0, separators=("|", ""), language="python")
    resolved = separators_for_config(cfg)
    assert resolved.separators == ("|", "")
    assert resolved.is_regex is False


def test_config_language_is_resolved():
    cfg = SplitConfig(chunk_size=10, chunk_overlap=0, language="markdown")
    assert separators_for_config(cfg).language is Language.MARKDOWN


def test_literal_split_drops_separator_into_lead():
    matcher = SeparatorMatcher(" ")
    assert matcher.split("a b  c") == [("", "a"), (" ", "b"), (" ", "c")]


def test_literal_separator_is_escaped():
    matcher = SeparatorMatcher(".")
    assert matcher.found_in("abc") is False
    assert matcher.split("a.b") == [("", "a"), (".", "b")]


def test_keep_start_and_end():
    matcher = SeparatorMatcher(" ")
    assert [p for _, p in matcher.split("a b c", "start")] == ["a", " b", " c"]
    assert [p for _, p in matcher.split("a b c", "end")] == ["a ", "b ", "c"]


def test_regex_split_keeps_matched_text_as_lead():
    matcher = SeparatorMatcher(r"\d+", is_regex=True)
    assert matcher.split("alpha1beta22gamma") == [("", "alpha"), ("1", "beta"), ("22", "gamma")]


def test_markdown_heading_separator():
    matcher = SeparatorMatcher(r"\n#{1,6} ", is_regex=True)
    assert matcher.split("intro\n## Two\nbody", "start") == [("", "intro"), ("", "\n## Two\nbody")]


def test_empty_separator_splits_characters():
    matcher = SeparatorMatcher("")
    assert matcher.is_character_level
    assert matcher.split("abc") == [("", "a"), ("", "b"), ("", "c")]


def test_zero_width_matches_are_not_split_points():
    matcher = SeparatorMatcher(r"(?=b)", is_regex=True)
    assert matcher.found_in("abc") is False
    assert matcher.split("abc") == [("", "abc")]


def test_split_with_offsets_reports_source_positions():
    matcher = SeparatorMatcher(" ")
    assert matcher.split_with_offsets("foo  bar") == [("", "foo", 0), (" ", "bar", 5)]
    assert SeparatorMatcher("\n").split_with_offsets("a\nb", "end") == [("", "a\n", 0), ("", "b", 2)]
