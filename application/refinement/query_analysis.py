"""Literal token extraction from raw refinement queries."""
from __future__ import annotations

import re
from typing import Collection, Iterable

from application.refinement.models import DEFAULT_ROLE_STOP_WORDS, SECTION_KEY_PATTERN

_NON_TOKEN_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_MIN_ROLE_HINT_LENGTH = 3


def extract_section_keys(query: str | None, pattern: re.Pattern[str] = SECTION_KEY_PATTERN) -> list[str]:
    """Return distinct ``*-section`` tokens of the query, lowercased, in first-seen order."""

    if not query or not query.strip():
        return []
    keys: dict[str, None] = {}
    for match in pattern.finditer(query):
        key = match.group(0)
        if key.strip():
            keys.setdefault(key.lower(), None)
    return list(keys)


def extract_role_hints(
    query: str | None,
    section_keys: Collection[str] | None = None,
    stop_words: Iterable[str] = DEFAULT_ROLE_STOP_WORDS,
) -> list[str]:
    """Return free-form keywords of the query that may name a section.

    Tokens are stripped of punctuation and lowercased; section keys, short
    tokens and stop words are dropped.
    """

    if not query or not query.strip():
        return []
    known_keys = set(section_keys or ())
    stop = frozenset(stop_words)
    hints: dict[str, None] = {}
    for token in query.split():
        cleaned = _NON_TOKEN_CHARS.sub("", token).lower()
        if not cleaned:
            continue
        if cleaned in known_keys or cleaned.endswith("-section"):
            continue
        if len(cleaned) < _MIN_ROLE_HINT_LENGTH or cleaned in stop:
            continue
        hints.setdefault(cleaned, None)
    return list(hints)


__all__ = ["extract_section_keys", "extract_role_hints"]
