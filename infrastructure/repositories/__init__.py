from infrastructure.repositories.in_memory_section_repository import InMemorySectionRepository
from infrastructure.repositories.sqlite_section_repository import SqliteSectionRepository

__all__ = [
    "InMemorySectionRepository",
    "SqliteSectionRepository",
]
