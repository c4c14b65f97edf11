"""Base class for query exporters."""

from abc import ABC, abstractmethod
from pathlib import Path

from rqlmongo.models import MongoQuery


class Exporter(ABC):
    """Base class for MongoQuery exporters."""

    @abstractmethod
    def to_string(self, query: MongoQuery) -> str:
        """Render the query as text."""
        ...

    def export(self, query: MongoQuery, output: Path) -> None:
        output.write_text(self.to_string(query) + "\n", encoding="utf-8")
