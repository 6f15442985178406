# iopole_query/query/builder.py
import logging
from collections.abc import Callable
from typing import Any, Self, TypeAlias

from iopole_query.operators import Logic, Op
from iopole_query.query.nodes import Condition, Group, Node, RangeCondition, Value, render

logger = logging.getLogger(__name__)

GroupCallback: TypeAlias = Callable[["Builder"], Any]


def build_group(logic: Logic, fn: GroupCallback) -> Group:
    """Populate a fresh builder with ``fn`` and return its finished group."""
    sub = Builder(logic)
    fn(sub)
    logger.debug("Built %s group with %s nodes", logic, len(sub))
    return sub.root


class Builder:
    """Fluent builder for search query strings.

    Conditions added at the top level are joined with AND. Nested scopes are
    populated through a callback that receives its own builder:

        query = (
            Builder()
            .matches("buyer.siren", "*123456789")
            .or_(lambda qb: qb.matches("buyer.corporateName", "iopole")
                              .matches("seller.corporateName", "myOtherCompany"))
            .where("createdDate", Op.GTE, "2024-01-01")
            .build()
        )
    """

    def __init__(self, logic: Logic = Logic.AND) -> None:
        self._logic = logic
        self._nodes: list[Node] = []

    @property
    def logic(self) -> Logic:
        return self._logic

    @property
    def root(self) -> Group:
        """Snapshot of the accumulated top-level group."""
        return Group(self._logic, tuple(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def __str__(self) -> str:
        return self.build()

    def add(self, node: Node) -> Self:
        """Append a prebuilt node."""
        self._nodes.append(node)
        return self

    def where(self, field: str, operator: Op, value: Value) -> Self:
        """Add a generic condition."""
        return self.add(Condition(field, operator, value))

    def matches(self, field: str, value: Value) -> Self:
        """Exact match, using := for numbers and booleans and : otherwise."""
        if isinstance(value, (bool, int, float)):
            return self.is_(field, value)
        return self.where(field, Op.EQUALS, value)

    def is_(self, field: str, value: Value) -> Self:
        """Strict match (:=) whatever the value type."""
        return self.where(field, Op.STRICT_EQUALS, value)

    def between(self, field: str, from_value: Value, to_value: Value) -> Self:
        """Inclusive range: field:[from TO to]."""
        return self.add(RangeCondition(field, Op.BETWEEN, from_value, to_value))

    def strict_between(self, field: str, from_value: Value, to_value: Value) -> Self:
        """Exclusive range: field:{from TO to}."""
        return self.add(RangeCondition(field, Op.STRICT_BETWEEN, from_value, to_value))

    def group(self, logic: Logic, callback: GroupCallback) -> Self:
        """Add a nested group populated by ``callback``."""
        return self.add(build_group(logic, callback))

    def and_(self, callback: GroupCallback) -> Self:
        return self.group(Logic.AND, callback)

    def and_not(self, callback: GroupCallback) -> Self:
        return self.group(Logic.AND_NOT, callback)

    def or_(self, callback: GroupCallback) -> Self:
        return self.group(Logic.OR, callback)

    def or_not(self, callback: GroupCallback) -> Self:
        return self.group(Logic.OR_NOT, callback)

    def build(self) -> str:
        """Render the query, dropping one pair of parentheses around the whole of it."""
        query = render(self.root)
        if query.startswith("(") and query.endswith(")"):
            query = query[1:-1]
        logger.debug("Built query: %s", query)
        return query
