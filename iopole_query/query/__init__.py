from .builder import Builder, build_group
from .nodes import Condition, Expression, Group, Node, RangeCondition, Value, format_value, render

__all__ = [
    "Builder",
    "build_group",
    "Expression",
    "Condition",
    "RangeCondition",
    "Group",
    "Node",
    "Value",
    "format_value",
    "render",
]
