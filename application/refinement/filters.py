"""Translate selected refinement chips back into a narrowed search request."""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from application.refinement.chips import resolve_section_key
from application.refinement.models import CONTEXT_PREFIX, KEYWORD, SECTION_KEY, SECTION_NAME, TAG
from domain.entities import ContentSection, RefinementChip, SearchRequest


def _append_context_value(target: dict[str, Any], path: list[str], value: str) -> None:
    if not path:
        return
    level = target
    for part in path[:-1]:
        if not isinstance(level.get(part), dict):
            level[part] = {}
        level = level[part]
    bucket = level.get(path[-1])
    if not isinstance(bucket, list):
        bucket = []
        level[path[-1]] = bucket
    if value not in bucket:
        bucket.append(value)


def build_search_request(query: str, chips: Iterable[RefinementChip]) -> SearchRequest:
    """Build a search request whose filters reflect the selected chips."""

    request = SearchRequest(query=query)
    for chip in chips:
        if not chip.type or not chip.value:
            continue
        if chip.type == TAG:
            request.tags.append(chip.value)
        elif chip.type == KEYWORD:
            request.keywords.append(chip.value)
        elif chip.type == SECTION_NAME:
            if not request.original_field_name:
                request.original_field_name = chip.value
            elif request.original_field_name != chip.value:
                _append_context_value(request.context, ["facets", "sectionName"], chip.value)
        elif chip.type == SECTION_KEY:
            _append_context_value(request.context, ["facets", "sectionKey"], chip.value)
        elif chip.type.startswith(CONTEXT_PREFIX):
            path = [part.strip() for part in chip.type[len(CONTEXT_PREFIX):].split(".") if part.strip()]
            _append_context_value(request.context, path, chip.value)
    return request


def _iter_context_filters(node: Mapping[str, Any], prefix: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], list[Any]]]:
    for key, value in node.items():
        path = prefix + (key,)
        if isinstance(value, Mapping):
            yield from _iter_context_filters(value, path)
        elif isinstance(value, list):
            yield path, value
        else:
            yield path, [value]


def _lookup(context: Any, path: tuple[str, ...]) -> Any:
    node = context
    for part in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node


def section_matches(section: ContentSection, request: SearchRequest) -> bool:
    """Return True when the section satisfies every filter of the request."""

    tags = set(section.tags or ())
    if any(tag not in tags for tag in request.tags):
        return False
    keywords = set(section.keywords or ())
    if any(keyword not in keywords for keyword in request.keywords):
        return False
    if request.original_field_name:
        name = (section.original_field_name or "").strip()
        if name != request.original_field_name:
            return False
    for path, accepted in _iter_context_filters(request.context):
        if path == ("facets", "sectionKey"):
            key = resolve_section_key(section)
            if key is None or key not in {str(value).lower() for value in accepted}:
                return False
            continue
        value = _lookup(section.context, path)
        if not isinstance(value, str) or value not in accepted:
            return False
    return True


__all__ = ["build_search_request", "section_matches"]
