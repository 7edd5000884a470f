"""SQLite-репозиторий для обогащённых секций контента."""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from application.refinement.chips import resolve_section_key
from domain.entities import ContentSection
from domain.interfaces import SectionRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, original_field_name, section_path, section_uri, tags, keywords, context, text"


def _like_pattern(key: str) -> str:
    escaped = key.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqliteSectionRepository(SectionRepository):
    """Хранит секции в лёгкой SQLite-базе с индексом по ключу секции."""

    def __init__(self, db_path: str | Path = "contentlake.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sections (
                    id TEXT PRIMARY KEY,
                    original_field_name TEXT,
                    section_path TEXT,
                    section_uri TEXT,
                    section_key TEXT,
                    tags TEXT NOT NULL,
                    keywords TEXT NOT NULL,
                    context TEXT,
                    text TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_sections_section_key ON sections (section_key)")

    def add(self, section: ContentSection) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                REPLACE INTO sections (
                    id, original_field_name, section_path, section_uri, section_key,
                    tags, keywords, context, text
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    section.id,
                    section.original_field_name,
                    section.section_path,
                    section.section_uri,
                    resolve_section_key(section),
                    json.dumps(list(section.tags or ())),
                    json.dumps(list(section.keywords or ())),
                    json.dumps(section.context) if section.context is not None else None,
                    section.text or "",
                ),
            )

    def get(self, section_id: str) -> ContentSection | None:
        with self._connect() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM sections WHERE id = ?", (section_id,)).fetchone()
        return self._to_section(row) if row else None

    def list(self) -> list[ContentSection]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM sections ORDER BY rowid").fetchall()
        return [self._to_section(row) for row in rows]

    def find_by_section_key(self, key: str, limit: int) -> list[ContentSection]:
        normalized = (key or "").strip().lower()
        if not normalized or limit <= 0:
            return []
        pattern = _like_pattern(normalized)
        with self._connect() as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS} FROM sections
                WHERE section_key = ?
                   OR lower(section_path) LIKE ? ESCAPE '\\'
                   OR lower(section_uri) LIKE ? ESCAPE '\\'
                ORDER BY rowid
                LIMIT ?
                """,
                (normalized, pattern, pattern, limit),
            ).fetchall()
        logger.debug("Ключ секции %s: найдено %d записей", normalized, len(rows))
        return [self._to_section(row) for row in rows]

    @staticmethod
    def _to_section(row: tuple) -> ContentSection:
        return ContentSection(
            id=row[0],
            original_field_name=row[1],
            section_path=row[2],
            section_uri=row[3],
            tags=json.loads(row[4]),
            keywords=json.loads(row[5]),
            context=json.loads(row[6]) if row[6] else None,
            text=row[7] or "",
        )


__all__ = ["SqliteSectionRepository"]
