"""Tokenization for repository metadata and search keywords.

Text is lowercased and split into maximal runs of ``[a-z0-9]``. Everything
else (punctuation, hyphens, underscores, dots, non-ASCII letters) acts as a
separator. There is no stemming and no stop word removal, so ``next.js``
becomes ``next`` and ``js`` and ``snake_case`` becomes ``snake`` and ``case``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from itertools import islice
import re


TOKEN_PATTERN = r"[a-z0-9]+"


@dataclass
class Token:
    """Represents a token emitted by the tokenizer.

    Character offsets refer to the lowercased text.
    """

    text: str
    position: int
    start_char: int
    end_char: int


class RegexTokenizer:
    """Lowercases the input and yields alphanumeric runs as tokens."""

    def __init__(self, pattern: str = TOKEN_PATTERN) -> None:
        self.pattern = re.compile(pattern)

    def __call__(self, text: str) -> Iterator[Token]:
        lowered = text.lower()
        for position, match in enumerate(self.pattern.finditer(lowered)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


_DEFAULT_TOKENIZER = RegexTokenizer()


class TokenStream:
    """Lazy, restartable sequence of token strings for a single value.

    Every iteration rescans the source text, so a stream can be consumed more
    than once. ``limit`` keeps only the first N tokens in source order; ``None``
    or a non-positive limit means unbounded.
    """

    __slots__ = ("_limit", "_tokenizer", "_value")

    def __init__(self, value: str | None, limit: int | None = None, tokenizer: RegexTokenizer | None = None) -> None:
        self._value = value or ""
        self._limit = limit if limit and limit > 0 else None
        self._tokenizer = tokenizer or _DEFAULT_TOKENIZER

    def __iter__(self) -> Iterator[str]:
        if not self._value:
            return iter(())
        tokens = (token.text for token in self._tokenizer(self._value))
        if self._limit is None:
            return tokens
        return islice(tokens, self._limit)

    def __repr__(self) -> str:
        return f"TokenStream({self._value[:40]!r}, limit={self._limit})"


def tokenize(value: str | None, limit: int | None = None) -> TokenStream:
    """Return the alphanumeric tokens of ``value``, truncated to ``limit``."""

    return TokenStream(value, limit)


def normalize_keywords(keywords: Iterable[str], limit: int | None) -> list[str]:
    """Turn free-text keywords into an ordered list of unique query tokens.

    Keywords are trimmed, empty ones dropped, the rest tokenized and flattened
    in first-seen order. The flattened list is truncated to ``limit`` before
    duplicates are removed, so a repeated token still counts against the cap.
    A bare string is treated as a single keyword rather than iterated by
    character.
    """

    if isinstance(keywords, str):
        keywords = [keywords]

    collected: list[str] = []
    for keyword in keywords:
        trimmed = keyword.strip()
        if not trimmed:
            continue
        collected.extend(tokenize(trimmed))
        if limit and len(collected) >= limit:
            break

    if limit:
        collected = collected[:limit]
    return list(dict.fromkeys(collected))
