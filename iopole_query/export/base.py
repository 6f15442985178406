# iopole_query/export/base.py
"""Base class for query exporters."""

from abc import ABC, abstractmethod
from pathlib import Path

from iopole_query.query.builder import Builder
from iopole_query.query.nodes import Node, render


class Exporter(ABC):
    """Base class for query exporters."""

    name: str

    @abstractmethod
    def to_string(self, query: Builder | Node) -> str:
        """Serialize a builder or an expression tree."""
        ...

    def export(self, query: Builder | Node, path: Path) -> None:
        """Write the serialized query to ``path``."""
        path.write_text(self.to_string(query) + "\n", encoding="utf-8")


def query_text(query: Builder | Node) -> str:
    """Query string for a builder (top-level parentheses stripped) or a bare node."""
    if isinstance(query, Builder):
        return query.build()
    return render(query)
