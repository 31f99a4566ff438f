"""Unit tests for the tokenizer and keyword normalization."""

import pytest

from starred_search.search.analyzers import (
    RegexTokenizer,
    Token,
    TokenStream,
    normalize_keywords,
    tokenize,
)


@pytest.mark.unit
class TestRegexTokenizer:
    """Regex tokenizer lowercases and emits positions and char offsets."""

    def test_emits_tokens_with_offsets(self):
        tokens = list(RegexTokenizer()("Hello, World"))

        assert tokens == [
            Token(text="hello", position=0, start_char=0, end_char=5),
            Token(text="world", position=1, start_char=7, end_char=12),
        ]

    def test_uppercase_letters_are_not_separators(self):
        assert [token.text for token in RegexTokenizer()("CamelCase")] == ["camelcase"]


@pytest.mark.unit
class TestTokenize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("test-repo-name", ["test", "repo", "name"]),
            ("snake_case", ["snake", "case"]),
            ("next.js", ["next", "js"]),
            ("numbers123 and 4ever", ["numbers123", "and", "4ever"]),
            ("developer's platform", ["developer", "s", "platform"]),
            ("café", ["caf"]),
        ],
    )
    def test_splits_on_non_alphanumerics(self, value, expected):
        assert list(tokenize(value)) == expected

    @pytest.mark.parametrize("value", ["", None, "   ", "--- !!! ...", "日本語"])
    def test_empty_or_non_matching_input_yields_nothing(self, value):
        assert list(tokenize(value)) == []

    def test_limit_keeps_first_tokens_in_source_order(self):
        assert list(tokenize("one two three four", limit=2)) == ["one", "two"]

    @pytest.mark.parametrize("limit", [None, 0, -3])
    def test_non_positive_limit_is_unbounded(self, limit):
        assert len(list(tokenize("a b c d e", limit=limit))) == 5

    def test_stream_is_restartable(self):
        stream = tokenize("alpha beta gamma", limit=2)

        assert isinstance(stream, TokenStream)
        assert list(stream) == ["alpha", "beta"]
        assert list(stream) == ["alpha", "beta"]

    def test_stream_is_lazy(self):
        stream = tokenize(" ".join(f"word{i}" for i in range(10_000)))

        first = next(iter(stream))

        assert first == "word0"


@pytest.mark.unit
class TestNormalizeKeywords:
    def test_flattens_multi_word_keywords_in_order(self):
        assert normalize_keywords(["Test description", "react"], limit=64) == ["test", "description", "react"]

    def test_drops_empty_and_whitespace_keywords(self):
        assert normalize_keywords(["", "   ", " test "], limit=64) == ["test"]

    def test_removes_duplicates_preserving_first_occurrence(self):
        assert normalize_keywords(["test", "TEST", "other test"], limit=64) == ["test", "other"]

    def test_truncates_before_deduplicating(self):
        # "a a a b": the cap of 3 is consumed by repeats of "a"
        assert normalize_keywords(["a", "a", "a", "b"], limit=3) == ["a"]

    def test_limit_caps_total_tokens(self):
        keywords = ["first", "second", "third fourth", "fifth"]

        assert normalize_keywords(keywords, limit=2) == ["first", "second"]

    def test_returns_empty_for_unusable_input(self):
        assert normalize_keywords([], limit=64) == []
        assert normalize_keywords(["  ", "!!!"], limit=64) == []

    def test_bare_string_is_one_keyword(self):
        assert normalize_keywords("react hooks", limit=64) == ["react", "hooks"]
