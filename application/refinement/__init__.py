from application.refinement.aggregation import similarity_from_distance
from application.refinement.chips import extract_counting_chips, extract_scoring_chips, resolve_section_key
from application.refinement.filters import build_search_request, section_matches
from application.refinement.models import RefinementSettings
from application.refinement.query_analysis import extract_role_hints, extract_section_keys
from application.refinement.service import RefinementEngine

__all__ = [
    "RefinementEngine",
    "RefinementSettings",
    "similarity_from_distance",
    "extract_section_keys",
    "extract_role_hints",
    "extract_scoring_chips",
    "extract_counting_chips",
    "resolve_section_key",
    "build_search_request",
    "section_matches",
]
