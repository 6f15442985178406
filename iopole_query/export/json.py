# iopole_query/export/json.py
import json
from dataclasses import asdict
from typing import Any

from iopole_query.query.builder import Builder
from iopole_query.query.nodes import Condition, Group, Node, RangeCondition

from .base import Exporter, query_text


def tree_to_dict(node: Node) -> dict[str, Any]:
    """Convert an expression tree to plain JSON-compatible data."""
    match node:
        case Condition():
            return {"type": "condition", **asdict(node)}
        case RangeCondition():
            return {"type": "range", **asdict(node)}
        case Group(logic=logic, children=children):
            return {
                "type": "group",
                "logic": logic,
                "children": [tree_to_dict(child) for child in children],
            }
        case _:
            raise TypeError(f"Unsupported query node: {node!r}")


class JsonExporter(Exporter):
    """Export the query string together with its expression tree."""

    name = "json"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_string(self, query: Builder | Node) -> str:
        tree = query.root if isinstance(query, Builder) else query
        data = {
            "query": query_text(query),
            "tree": tree_to_dict(tree),
        }
        return json.dumps(data, indent=self.indent, ensure_ascii=False)
