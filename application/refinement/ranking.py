"""Ranking and diversification of scored refinement chips."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping

from domain.entities import RefinementChip


def sort_chips(scores: Mapping[RefinementChip, float]) -> list[RefinementChip]:
    """Order chips by cumulative score, highest first.

    Equal scores are broken by value, then type, both ascending, so that the
    output does not depend on dictionary insertion order.
    """

    ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0].value, item[0].type))
    return [chip for chip, _score in ranked]


def _place(limited: list[RefinementChip], candidate: RefinementChip, limit: int) -> None:
    if len(limited) < limit:
        limited.append(candidate)
    elif limited:
        limited[-1] = candidate


def ensure_type_included(
    limited: list[RefinementChip],
    sorted_chips: list[RefinementChip],
    chip_type: str,
    limit: int,
) -> None:
    """Make room for the best chip of ``chip_type`` when truncation dropped every one."""

    if any(chip.type == chip_type for chip in limited):
        return
    candidate = next((chip for chip in sorted_chips if chip.type == chip_type), None)
    if candidate is None:
        return
    _place(limited, candidate, limit)


def ensure_value_included(
    limited: list[RefinementChip],
    sorted_chips: list[RefinementChip],
    chip_type: str,
    value: str,
    limit: int,
) -> None:
    """Guarantee a chip literally named by the query, synthesizing one if it was never scored."""

    wanted = value.lower()

    def matches(chip: RefinementChip) -> bool:
        return chip.type == chip_type and chip.value.lower() == wanted

    if any(matches(chip) for chip in limited):
        return
    candidate = next((chip for chip in sorted_chips if matches(chip)), None)
    _place(limited, candidate or RefinementChip(value, chip_type), limit)


def attach_counts(chips: Iterable[RefinementChip], counts: Mapping[RefinementChip, int]) -> list[RefinementChip]:
    return [replace(chip, count=int(counts.get(chip, 0))) for chip in chips]


__all__ = [
    "sort_chips",
    "ensure_type_included",
    "ensure_value_included",
    "attach_counts",
]
