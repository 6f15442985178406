# iopole_query/operators.py
from enum import StrEnum


class Op(StrEnum):
    """Comparison tokens placed between a field and its value."""

    EQUALS = ":"
    STRICT_EQUALS = ":="  # For integer or boolean
    GT = ":>"
    GTE = ":>="
    LT = ":<"
    LTE = ":<="
    BETWEEN = ":["
    STRICT_BETWEEN = ":{"


class Logic(StrEnum):
    """Tokens used to join the children of a group."""

    AND = "AND"
    OR = "OR"
    AND_NOT = "AND NOT"
    OR_NOT = "OR NOT"


def closing_bracket(op: Op) -> str:
    """Return the bracket that closes a range opened by ``op``."""
    return "}" if op == Op.STRICT_BETWEEN else "]"
