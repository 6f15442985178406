# iopole_query/cli.py
import logging
import math
import os
import sys
from pathlib import Path
from typing import Annotated, Literal

import cyclopts

from iopole_query.export import get_exporter
from iopole_query.operators import Logic, Op
from iopole_query.query import Builder, Value

logger = logging.getLogger(__name__)

app = cyclopts.App(
    name="iopole-query",
    help="Build Iopole search query strings.",
)

LOGIC = {
    "and": Logic.AND,
    "or": Logic.OR,
    "and-not": Logic.AND_NOT,
    "or-not": Logic.OR_NOT,
}

# Longest tokens first so ":>=" is not read as ":>".
_COMPARISON_OPS = sorted(
    (op for op in Op if op not in (Op.BETWEEN, Op.STRICT_BETWEEN)),
    key=lambda op: len(op),
    reverse=True,
)


def coerce_value(raw: str) -> Value:
    """Turn a command-line string into a bool, int, float or str."""
    if raw in ("true", "false"):
        return raw == "true"
    try:
        integer = int(raw)
    except ValueError:
        pass
    else:
        return integer if str(integer) == raw else raw
    try:
        number = float(raw)
    except ValueError:
        return raw
    # Only canonical literals are coerced: "01234", "1_000" and "1e3" stay strings.
    return number if math.isfinite(number) and repr(number) == raw else raw


def _split_pair(arg: str, option: str) -> tuple[str, str]:
    field, sep, value = arg.partition("=")
    if not sep or not field:
        raise ValueError(f"{option} expects field=value, got: {arg!r}")
    return field, value


def _split_range(arg: str, option: str) -> tuple[str, Value, Value]:
    field, bounds = _split_pair(arg, option)
    lo, sep, hi = bounds.partition("..")
    if not sep:
        raise ValueError(f"{option} expects field=from..to, got: {arg!r}")
    return field, coerce_value(lo), coerce_value(hi)


def _split_comparison(arg: str) -> tuple[str, Op, Value]:
    index = arg.find(":")
    if index <= 0:
        raise ValueError(f"--where expects field<op>value (e.g. age:>=18), got: {arg!r}")
    field, rest = arg[:index], arg[index:]
    op = next(op for op in _COMPARISON_OPS if rest.startswith(op))
    return field, op, coerce_value(rest[len(op) :])


def _populate(
    qb: Builder,
    match: list[str],
    is_: list[str],
    where: list[str],
    between: list[str],
    strict_between: list[str],
) -> None:
    for arg in match:
        field, value = _split_pair(arg, "--match")
        qb.matches(field, coerce_value(value))
    for arg in is_:
        field, value = _split_pair(arg, "--is")
        qb.is_(field, coerce_value(value))
    for arg in where:
        qb.where(*_split_comparison(arg))
    for arg in between:
        qb.between(*_split_range(arg, "--between"))
    for arg in strict_between:
        qb.strict_between(*_split_range(arg, "--strict-between"))


def _check_negation_order(logic: str, *options: list[str] | None) -> None:
    # Options are applied kind by kind; a NOT join must not reorder its terms.
    if logic in ("and-not", "or-not") and sum(1 for values in options if values) > 1:
        raise ValueError(f"--logic {logic} requires all conditions to use the same option")


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.getenv("IOPOLE_QUERY_LOG_LEVEL", "WARNING").upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level in IOPOLE_QUERY_LOG_LEVEL: {level!r}")
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("iopole_query").setLevel(level)


@app.command(name="build")
def build(
    match: Annotated[
        list[str] | None,
        cyclopts.Parameter(name=["--match", "-m"], help="field=value, := for numbers/booleans"),
    ] = None,
    is_: Annotated[
        list[str] | None,
        cyclopts.Parameter(name=["--is", "-i"], help="field=value, always :="),
    ] = None,
    where: Annotated[
        list[str] | None,
        cyclopts.Parameter(name=["--where", "-w"], help="field<op>value, e.g. age:>=18"),
    ] = None,
    between: Annotated[
        list[str] | None,
        cyclopts.Parameter(name=["--between", "-b"], help="field=from..to, inclusive"),
    ] = None,
    strict_between: Annotated[
        list[str] | None,
        cyclopts.Parameter(name="--strict-between", help="field=from..to, exclusive"),
    ] = None,
    logic: Annotated[
        Literal["and", "or", "and-not", "or-not"],
        cyclopts.Parameter(name=["--logic", "-l"], help="Logic joining the conditions"),
    ] = "and",
    format: Annotated[
        str,
        cyclopts.Parameter(name=["--format", "-f"], help="Output format: text, json"),
    ] = "text",
    output: Annotated[
        Path | None,
        cyclopts.Parameter(name=["--output", "-o"], help="Output file path"),
    ] = None,
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Enable debug logging"),
    ] = False,
) -> None:
    """Build a query string from command-line conditions."""
    try:
        _configure_logging(verbose)
        exporter = get_exporter(format)
        _check_negation_order(logic, match, is_, where, between, strict_between)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    def fill(qb: Builder) -> None:
        _populate(qb, match or [], is_ or [], where or [], between or [], strict_between or [])

    builder = Builder()
    try:
        if logic == "and":
            fill(builder)
        else:
            builder.group(LOGIC[logic], fill)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.debug("Top-level nodes: %s", len(builder))

    if output:
        exporter.export(builder, output)
        print(f"Exported query to {output}")
    else:
        print(exporter.to_string(builder))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
