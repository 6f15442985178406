# iopole_query/query/nodes.py
import math
from dataclasses import dataclass
from typing import TypeAlias

from iopole_query.errors import UnsupportedValueType
from iopole_query.operators import Logic, Op, closing_bracket

Value: TypeAlias = str | int | float | bool


@dataclass(frozen=True)
class Expression:
    """Base AST node for query expressions."""

    def __and__(self, other: "Expression") -> "Group":
        if not isinstance(other, Expression):
            return NotImplemented
        return _combine(Logic.AND, self, other)

    def __or__(self, other: "Expression") -> "Group":
        if not isinstance(other, Expression):
            return NotImplemented
        return _combine(Logic.OR, self, other)

    def __str__(self) -> str:
        return render(self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Condition(Expression):
    """Field comparison: field<operator>value."""

    field: str
    operator: Op
    value: Value


@dataclass(frozen=True)
class RangeCondition(Expression):
    """Range comparison: field:[from TO to] or field:{from TO to}."""

    field: str
    operator: Op
    from_value: Value
    to_value: Value


@dataclass(frozen=True)
class Group(Expression):
    """Children joined by a logic token."""

    logic: Logic
    children: tuple["Node", ...] = ()

    def add(self, node: "Node") -> "Group":
        """Return a copy of this group with ``node`` appended."""
        return Group(self.logic, (*self.children, node))


Node: TypeAlias = Condition | RangeCondition | Group


def _combine(logic: Logic, left: Expression, right: Expression) -> Group:
    # Chained operators extend the left group instead of nesting it.
    if isinstance(left, Group) and left.logic == logic:
        return left.add(right)  # type: ignore[arg-type]
    return Group(logic, (left, right))  # type: ignore[arg-type]


def format_value(value: Value) -> str:
    """Format a value for embedding in a query token.

    Strings are wrapped in double quotes unless they already start with one,
    in which case they are passed through untouched. Numbers and booleans are
    rendered unquoted.
    """
    match value:
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float() if math.isfinite(value):
            if value.is_integer():
                return str(int(value))
            mantissa, _, exponent = repr(value).partition("e")
            return f"{mantissa}e{int(exponent):+d}" if exponent else mantissa
        case str():
            if value.startswith('"'):
                return value
            return f'"{value}"'
        case _:
            raise UnsupportedValueType(value)


def render(node: Node) -> str:
    """Render an expression tree to query syntax."""
    match node:
        case Condition(field=f, operator=op, value=v):
            return f"{f}{op}{format_value(v)}"
        case RangeCondition(field=f, operator=op, from_value=lo, to_value=hi):
            return f"{f}{op}{format_value(lo)} TO {format_value(hi)}{closing_bracket(op)}"
        case Group(logic=logic, children=children):
            # Empty sub-groups are dropped so they never leave a dangling join token.
            parts = [text for text in map(render, children) if text]
            joined = f" {logic} ".join(parts)
            return f"({joined})" if len(parts) > 1 else joined
        case _:
            raise TypeError(f"Unsupported query node: {node!r}")
