# iopole_query/__init__.py
"""iopole_query - A fluent builder for Iopole search query strings."""

from iopole_query.errors import QueryError, UnsupportedValueType
from iopole_query.operators import Logic, Op
from iopole_query.query import (
    Builder,
    Condition,
    Group,
    RangeCondition,
    build_group,
    format_value,
    render,
)

__all__ = [
    # Operators
    "Op",
    "Logic",
    # Expression tree
    "Condition",
    "RangeCondition",
    "Group",
    "format_value",
    "render",
    # Builder
    "Builder",
    "build_group",
    # Errors
    "QueryError",
    "UnsupportedValueType",
]
