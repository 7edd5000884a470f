"""Embedder that averages hashed word vectors over section text."""
from __future__ import annotations

import hashlib
import math
import re
from collections import Counter
from typing import Sequence

from domain.entities import Query
from domain.interfaces import Embedder

_WORD = re.compile(r"[0-9A-Za-z_]+")


class WordHashEmbedder(Embedder):
    """Deterministic bag-of-words vectors; texts sharing words land close together."""

    def __init__(self, dimension: int = 64) -> None:
        self._dimension = dimension
        self._model_id = f"word-hash-{dimension}"

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def dimension(self) -> int:
        return self._dimension

    def _word_vector(self, word: str) -> list[float]:
        digest = hashlib.md5(word.encode("utf-8")).digest()
        # Centered so unrelated words tend to cancel instead of piling up.
        return [digest[i % len(digest)] / 255.0 - 0.5 for i in range(self._dimension)]

    def _vectorize(self, text: str) -> list[float]:
        counts = Counter(word.lower() for word in _WORD.findall(text))
        vector = [0.0] * self._dimension
        if not counts:
            return vector
        total = sum(counts.values())
        for word, count in counts.items():
            for idx, value in enumerate(self._word_vector(word)):
                vector[idx] += value * count / total
        norm = math.sqrt(sum(value * value for value in vector)) or 1.0
        return [value / norm for value in vector]

    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        return [self._vectorize(text) for text in texts]

    def embed_query(self, query: Query) -> list[float]:
        return self._vectorize(query.text)


__all__ = ["WordHashEmbedder"]
