# iopole_query/export/text.py
from iopole_query.query.builder import Builder
from iopole_query.query.nodes import Node

from .base import Exporter, query_text


class TextExporter(Exporter):
    """Export the query string as is."""

    name = "text"

    def to_string(self, query: Builder | Node) -> str:
        return query_text(query)
