"""Import enriched sections from a JSON or JSON Lines file into the section store."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Iterator

from domain.entities import ContentSection
from infrastructure.repositories.sqlite_section_repository import SqliteSectionRepository
from infrastructure.serialization import section_from_dict


def read_sections(path: Path) -> Iterator[ContentSection]:
    raw = path.read_text(encoding="utf-8")
    records: list[Any]
    if path.suffix == ".jsonl":
        records = [json.loads(line) for line in raw.splitlines() if line.strip()]
    else:
        data = json.loads(raw)
        records = data.get("sections", []) if isinstance(data, dict) else data
    for record in records:
        yield section_from_dict(record)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", type=Path, help="JSON array, {\"sections\": [...]} object or .jsonl file")
    parser.add_argument(
        "--db-path",
        default="data/contentlake.db",
        help="SQLite database used by the API (default: data/contentlake.db)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    repository = SqliteSectionRepository(db_path=args.db_path)
    imported = 0
    for section in read_sections(args.source):
        repository.add(section)
        imported += 1
    print(f"Imported {imported} sections into {args.db_path}")


if __name__ == "__main__":
    main()
