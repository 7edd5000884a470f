"""Dependency wiring for the content refinement application."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal

from application.refinement.models import RefinementSettings
from application.refinement.service import RefinementEngine
from application.use_cases.index_sections import index_sections
from domain.interfaces import Embedder, SectionRepository, SimilaritySearchClient
from infrastructure.embedding.word_hash_embedder import WordHashEmbedder
from infrastructure.repositories.in_memory_section_repository import InMemorySectionRepository
from infrastructure.repositories.sqlite_section_repository import SqliteSectionRepository
from infrastructure.search.http_search_client import HttpSearchConfig, HttpSimilaritySearchClient
from infrastructure.search.in_memory_search_client import InMemorySimilaritySearchClient

logger = logging.getLogger(__name__)

SearchBackendName = Literal["memory", "faiss", "http"]
RepositoryName = Literal["sqlite", "memory"]
EmbedderName = Literal["word-hash", "sentence-transformers"]


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    embedder: Embedder | None
    search_client: SimilaritySearchClient
    section_repository: SectionRepository
    refinement_engine: RefinementEngine
    settings: RefinementSettings


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for selecting the search backend, store and embedder."""

    data_root: str = "data"
    search_backend: SearchBackendName = "memory"
    repository: RepositoryName = "sqlite"
    embedder: EmbedderName = "word-hash"
    embedding_dimension: int = 64
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    models_dir: str | None = None
    search_url: str | None = None
    search_api_key: str | None = None
    search_timeout: float = 30.0
    index_on_startup: bool = True
    refinement: RefinementSettings = field(default_factory=RefinementSettings)

    @property
    def db_path(self) -> Path:
        return Path(self.data_root) / "contentlake.db"


def _resolve_model_reference(model_name: str, config: ContainerConfig) -> str:
    """Prefer a local copy of the model under ``models_dir`` when one exists."""

    if config.models_dir:
        local = Path(config.models_dir).expanduser() / model_name
        if local.is_dir():
            return str(local)
    return model_name


def _build_sentence_transformers(config: ContainerConfig) -> Embedder:
    from infrastructure.embedding.sentence_transformers_embedder import (  # noqa: PLC0415
        SentenceTransformersConfig,
        SentenceTransformersEmbedder,
    )

    model = _resolve_model_reference(config.embedding_model, config)
    return SentenceTransformersEmbedder(SentenceTransformersConfig(model_name=model))


def _build_memory_search(config: ContainerConfig, embedder: Embedder | None) -> SimilaritySearchClient:
    assert embedder is not None
    return InMemorySimilaritySearchClient(embedder)


def _build_faiss_search(config: ContainerConfig, embedder: Embedder | None) -> SimilaritySearchClient:
    from infrastructure.search.faiss_search_client import FaissSimilaritySearchClient  # noqa: PLC0415

    assert embedder is not None
    return FaissSimilaritySearchClient(embedder)


def _build_http_search(config: ContainerConfig, embedder: Embedder | None) -> SimilaritySearchClient:
    return HttpSimilaritySearchClient(
        HttpSearchConfig(base_url=config.search_url, timeout=config.search_timeout, api_key=config.search_api_key)
    )


_EMBEDDER_FACTORIES: dict[EmbedderName, Callable[[ContainerConfig], Embedder]] = {
    "word-hash": lambda cfg: WordHashEmbedder(dimension=cfg.embedding_dimension),
    "sentence-transformers": _build_sentence_transformers,
}

_SEARCH_FACTORIES: dict[SearchBackendName, Callable[[ContainerConfig, Embedder | None], SimilaritySearchClient]] = {
    "memory": _build_memory_search,
    "faiss": _build_faiss_search,
    "http": _build_http_search,
}

_REPOSITORY_FACTORIES: dict[RepositoryName, Callable[[ContainerConfig], SectionRepository]] = {
    "sqlite": lambda cfg: SqliteSectionRepository(db_path=cfg.db_path),
    "memory": lambda cfg: InMemorySectionRepository(),
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig()
    if cfg.search_backend not in _SEARCH_FACTORIES:
        raise ValueError(f"Unknown search backend '{cfg.search_backend}'")
    try:
        repository = _REPOSITORY_FACTORIES[cfg.repository](cfg)
    except KeyError as exc:
        raise ValueError(f"Unknown repository '{cfg.repository}'") from exc

    embedder: Embedder | None = None
    if cfg.search_backend != "http":
        try:
            embedder = _EMBEDDER_FACTORIES[cfg.embedder](cfg)
        except KeyError as exc:
            raise ValueError(f"Unknown embedder '{cfg.embedder}'") from exc
    search_client = _SEARCH_FACTORIES[cfg.search_backend](cfg, embedder)
    logger.info("Search backend: %s, section repository: %s", cfg.search_backend, cfg.repository)

    if cfg.index_on_startup and embedder is not None:
        index_sections(repository.list(), embedder=embedder, search_client=search_client)

    return Container(
        embedder=embedder,
        search_client=search_client,
        section_repository=repository,
        refinement_engine=RefinementEngine(search_client, repository, cfg.refinement),
        settings=cfg.refinement,
    )


def load_config_from_env() -> ContainerConfig:
    """Read ``CONTENTLAKE_*`` environment variables into a container config."""

    defaults = ContainerConfig()
    return ContainerConfig(
        data_root=os.getenv("CONTENTLAKE_DATA_ROOT", defaults.data_root),
        search_backend=os.getenv("CONTENTLAKE_SEARCH_BACKEND", defaults.search_backend),  # type: ignore[arg-type]
        repository=os.getenv("CONTENTLAKE_REPOSITORY", defaults.repository),  # type: ignore[arg-type]
        embedder=os.getenv("CONTENTLAKE_EMBEDDER", defaults.embedder),  # type: ignore[arg-type]
        embedding_dimension=int(os.getenv("CONTENTLAKE_EMBEDDING_DIMENSION", defaults.embedding_dimension)),
        embedding_model=os.getenv("CONTENTLAKE_EMBEDDING_MODEL", defaults.embedding_model),
        models_dir=os.getenv("CONTENTLAKE_MODELS_DIR") or None,
        search_url=os.getenv("CONTENTLAKE_SEARCH_URL") or None,
        search_api_key=os.getenv("CONTENTLAKE_SEARCH_API_KEY") or None,
        search_timeout=float(os.getenv("CONTENTLAKE_SEARCH_TIMEOUT", defaults.search_timeout)),
        index_on_startup=os.getenv("CONTENTLAKE_INDEX_ON_STARTUP", "1").lower() not in {"0", "false", "no"},
    )


__all__ = ["Container", "ContainerConfig", "build_default_container", "load_config_from_env"]
