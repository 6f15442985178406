# iopole_query/errors.py
class QueryError(Exception):
    """Base class for errors raised while building a query."""


class UnsupportedValueType(QueryError, TypeError):
    """Value cannot be embedded in a query token."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Unsupported value {value!r} of type {type(value).__name__}; "
            "expected str, int, float or bool"
        )
