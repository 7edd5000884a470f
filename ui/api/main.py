"""FastAPI layer that exposes refinement and filtered search operations."""
from __future__ import annotations

import logging

import requests
from fastapi import Depends, FastAPI, HTTPException, Query as FastAPIQuery
from pydantic import BaseModel, Field

from application.use_cases.index_sections import index_sections
from application.use_cases.search_sections import search_sections
from domain.entities import RefinementChip
from domain.interfaces import IndexableSearchClient
from infrastructure.config import Container, build_default_container, load_config_from_env
from infrastructure.serialization import section_from_dict, section_to_dict
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class ChipPayload(BaseModel):
    value: str
    type: str
    count: int = 0


class SectionPayload(BaseModel):
    id: str
    original_field_name: str | None = None
    section_path: str | None = None
    section_uri: str | None = None
    tags: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    context: dict | None = None
    text: str = ""


class ImportRequest(BaseModel):
    sections: list[SectionPayload]


class ImportResponse(BaseModel):
    imported: int


class SearchPayload(BaseModel):
    query: str
    chips: list[ChipPayload] = Field(default_factory=list)
    top_k: int = Field(default=10, ge=1, le=200)


class SearchHit(BaseModel):
    section_id: str | None
    distance: float
    section: SectionPayload | None = None


class SearchResponse(BaseModel):
    query: str
    results: list[SearchHit]


def create_app(container: Container | None = None) -> FastAPI:
    app = FastAPI(title="Content Refinement API")
    app.state.container = container

    def get_container() -> Container:
        if app.state.container is None:
            setup_logging()
            app.state.container = build_default_container(load_config_from_env())
        return app.state.container

    @app.get("/api/refine", response_model=list[ChipPayload])
    def refine_endpoint(
        query: str = FastAPIQuery(..., description="Free-text query"),
        limit: int | None = FastAPIQuery(None, description="Maximum number of chips"),
        container: Container = Depends(get_container),
    ) -> list[ChipPayload]:
        if not query.strip():
            raise HTTPException(status_code=400, detail="Query must not be blank.")
        try:
            chips = container.refinement_engine.get_refinement_chips(query, limit)
        except requests.RequestException as exc:
            logger.exception("Search backend failed while refining %r", query)
            raise HTTPException(status_code=502, detail="Unable to reach the search backend.") from exc
        return [ChipPayload(**chip.as_dict()) for chip in chips]

    @app.post("/api/search", response_model=SearchResponse)
    def search_endpoint(payload: SearchPayload, container: Container = Depends(get_container)) -> SearchResponse:
        chips = [RefinementChip(chip.value, chip.type) for chip in payload.chips]
        try:
            matches = search_sections(
                payload.query,
                search_client=container.search_client,
                chips=chips,
                top_k=payload.top_k,
            )
        except requests.RequestException as exc:
            logger.exception("Search backend failed for %r", payload.query)
            raise HTTPException(status_code=502, detail="Unable to reach the search backend.") from exc
        results = [
            SearchHit(
                section_id=match.section.id if match.section else match.chunk_id,
                distance=match.distance,
                section=SectionPayload(**section_to_dict(match.section)) if match.section else None,
            )
            for match in matches
        ]
        return SearchResponse(query=payload.query, results=results)

    @app.post("/api/sections", response_model=ImportResponse)
    def import_endpoint(payload: ImportRequest, container: Container = Depends(get_container)) -> ImportResponse:
        sections = [section_from_dict(item.model_dump()) for item in payload.sections]
        if container.embedder is not None and isinstance(container.search_client, IndexableSearchClient):
            index_sections(
                sections,
                embedder=container.embedder,
                search_client=container.search_client,
                section_repository=container.section_repository,
            )
        else:
            for section in sections:
                container.section_repository.add(section)
        return ImportResponse(imported=len(sections))

    @app.get("/api/sections", response_model=list[SectionPayload])
    def sections_endpoint(container: Container = Depends(get_container)) -> list[SectionPayload]:
        return [SectionPayload(**section_to_dict(section)) for section in container.section_repository.list()]

    return app


app = create_app()
