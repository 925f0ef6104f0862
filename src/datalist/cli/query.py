"""Filter, sort and compare typed values from the command line."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from datalist.config import get_settings
from datalist.core.errors import DatalistError, InvalidFilterError
from datalist.core.filters import parse_filter_values, query_records
from datalist.core.loading import conforms, load_record_schema, load_records, shape_value
from datalist.core.values import compare_values, value_matches
from datalist.models import Filter, MatchMode, Schema, Sort, TypeTag

query_app = typer.Typer(help="Filter, sort and compare typed values.")
console = Console()


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


def _format_value(value: Any) -> str:
    if isinstance(value, (set, frozenset)):
        return ", ".join(sorted(_format_value(v) for v in value))
    if isinstance(value, (list, tuple)):
        return ", ".join(_format_value(v) for v in value)
    return str(value)


def _render_table(headers: Sequence[str], rows: Sequence[dict[str, Any]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(_format_value(row[h]) if h in row else "" for h in headers))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _parse_filter_option(raw: str, match_by: str, all_values: bool) -> Filter:
    key, sep, values = raw.partition("=")
    if not sep or not key:
        raise InvalidFilterError(f"Filter must look like KEY=VALUE[,VALUE...]: {raw!r}")
    return Filter(key=key.strip(), values=values.split(","), all=all_values, match_by=match_by)


def _parse_sort_option(raw: str) -> Sort:
    key, _, direction = raw.partition(":")
    try:
        return Sort(key=key.strip(), direction=direction.strip().lower() or "asc")
    except ValidationError as exc:
        raise InvalidFilterError(f"Sort must look like KEY[:asc|desc]: {raw!r}") from exc


def _build_schema(type_: TypeTag, elem: TypeTag | None) -> Schema:
    try:
        return Schema(type=type_, elem=Schema(type=elem) if elem is not None else None)
    except ValidationError as exc:
        raise InvalidFilterError(f"Invalid schema: {exc.errors()[0]['msg']}") from exc


def _parse_value(schema: Schema, raw: str) -> Any:
    if schema.is_collection:
        try:
            decoded = json.loads(raw)
        except ValueError as exc:
            raise InvalidFilterError(f"Collection values must be JSON arrays: {raw!r}") from exc
        if not isinstance(decoded, list):
            raise InvalidFilterError(f"Collection values must be JSON arrays: {raw!r}")
        if not conforms(schema, decoded):
            raise InvalidFilterError(f"Invalid {schema.type.value} value: {raw!r}")
        return shape_value(schema, decoded)
    return parse_filter_values(schema, [raw])[0]


@query_app.command("records")
def records(
    path: Annotated[str, typer.Argument(help="JSON file holding an array of records.")],
    schema: Annotated[str, typer.Option("--schema", help="JSON file mapping attributes to schemas.")],
    filter_: Annotated[
        list[str] | None, typer.Option("--filter", help="Filter as KEY=VALUE[,VALUE...]; repeatable.")
    ] = None,
    match_by: Annotated[str, typer.Option(help="Match mode applied to every filter.")] = "",
    all_values: Annotated[bool, typer.Option("--all", help="Require every filter value to match.")] = False,
    sort: Annotated[list[str] | None, typer.Option(help="Sort as KEY[:asc|desc]; repeatable.")] = None,
    limit: Annotated[int | None, typer.Option(min=0, help="Max rows to return.")] = None,
) -> None:
    """Filter and sort records from a JSON file."""
    try:
        record_schema = load_record_schema(schema)
        rows = query_records(
            load_records(path, record_schema),
            record_schema,
            filters=[_parse_filter_option(f, match_by, all_values) for f in filter_ or []],
            sorts=[_parse_sort_option(s) for s in sort or []],
            limit=limit if limit is not None else get_settings().default_limit,
        )
    except (DatalistError, ValidationError) as exc:
        raise _fail(str(exc)) from exc
    _render_table(list(record_schema), rows)


@query_app.command("match")
def match(
    value: Annotated[str, typer.Argument(help="Value to test; JSON array for list/set types.")],
    filter_value: Annotated[str, typer.Argument(metavar="FILTER", help="Filter value or pattern.")],
    type_: Annotated[TypeTag, typer.Option("--type", help="Declared value type.")],
    elem: Annotated[TypeTag | None, typer.Option(help="Element type for list/set values.")] = None,
    match_by: Annotated[str, typer.Option(help="Match mode.")] = "",
) -> None:
    """Test a single value against a filter."""
    try:
        value_schema = _build_schema(type_, elem)
        parsed_filter = parse_filter_values(value_schema, [filter_value], match_by)[0]
        result = value_matches(value_schema, _parse_value(value_schema, value), parsed_filter, MatchMode.parse(match_by))
    except DatalistError as exc:
        raise _fail(str(exc)) from exc
    console.print("true" if result else "false")


@query_app.command("compare")
def compare(
    value1: Annotated[str, typer.Argument(help="First value.")],
    value2: Annotated[str, typer.Argument(help="Second value.")],
    type_: Annotated[TypeTag, typer.Option("--type", help="Declared value type.")],
    elem: Annotated[TypeTag | None, typer.Option(help="Element type for list/set values.")] = None,
) -> None:
    """Order two values of the same type."""
    try:
        value_schema = _build_schema(type_, elem)
        result = compare_values(value_schema, _parse_value(value_schema, value1), _parse_value(value_schema, value2))
    except DatalistError as exc:
        raise _fail(str(exc)) from exc
    console.print(str(result))
