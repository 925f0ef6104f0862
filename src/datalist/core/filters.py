import logging
import re
from collections.abc import Iterable, Sequence
from functools import cmp_to_key
from typing import Any

from datalist.core.errors import InvalidFilterError
from datalist.core.values import compare_values, value_matches
from datalist.models import Filter, MatchMode, RecordSchema, Schema, Sort, SortDirection, TypeTag

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "t", "1", "yes"}
_FALSE_STRINGS = {"false", "f", "0", "no"}


def _parse_scalar(key: str, schema: Schema, raw: str, mode: MatchMode) -> Any:
    match schema.type:
        case TypeTag.STRING:
            if mode is MatchMode.RE:
                try:
                    return re.compile(raw)
                except re.error as exc:
                    raise InvalidFilterError(f"Invalid regular expression for {key!r}: {raw!r} ({exc})") from exc
            return raw
        case TypeTag.BOOL:
            lowered = raw.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        case TypeTag.INT:
            try:
                return int(raw)
            except ValueError:
                pass
        case TypeTag.FLOAT:
            try:
                return float(raw)
            except ValueError:
                pass
    raise InvalidFilterError(f"Invalid {schema.type.value} filter value for {key!r}: {raw!r}")


def parse_filter_values(
    schema: Schema, values: Sequence[str], match_by: MatchMode | str | None = "", key: str = "value"
) -> list[Any]:
    """Convert raw filter strings to the scalar type the schema declares.

    Collection schemas are parsed against their innermost element schema, so a
    ``list`` of ``int`` takes integer filter values.
    """
    mode = MatchMode.parse(match_by)
    scalar = schema.scalar()
    return [_parse_scalar(key, scalar, raw, mode) for raw in values]


def _lookup_schema(record_schema: RecordSchema, key: str) -> Schema:
    try:
        return record_schema[key]
    except KeyError:
        raise InvalidFilterError(f"Unknown attribute {key!r}") from None


def _record_passes(record: dict[str, Any], schema: Schema, f: Filter, filter_values: list[Any]) -> bool:
    if f.key not in record:
        return False
    value = record[f.key]
    results = (value_matches(schema, value, fv, f.match_by) for fv in filter_values)
    return all(results) if f.all else any(results)


def apply_filters(
    records: Iterable[dict[str, Any]], record_schema: RecordSchema, filters: Sequence[Filter]
) -> list[dict[str, Any]]:
    """Return the records that pass every filter, in input order."""
    prepared = []
    for f in filters:
        schema = _lookup_schema(record_schema, f.key)
        prepared.append((f, schema, parse_filter_values(schema, f.values, f.match_by, key=f.key)))

    kept = [
        record
        for record in records
        if all(_record_passes(record, schema, f, values) for f, schema, values in prepared)
    ]
    logger.debug("Filters kept %d record(s) across %d filter(s)", len(kept), len(prepared))
    return kept


def apply_sorts(
    records: Iterable[dict[str, Any]], record_schema: RecordSchema, sorts: Sequence[Sort]
) -> list[dict[str, Any]]:
    """Stable multi-key sort; the first sort is the primary key."""
    keyed: list[tuple[Sort, Schema]] = []
    for s in sorts:
        schema = _lookup_schema(record_schema, s.key)
        if not schema.is_sortable:
            raise InvalidFilterError(f"Cannot sort on {s.key!r}: {schema.type.value} values have no ordering")
        keyed.append((s, schema))

    def _compare(a: dict[str, Any], b: dict[str, Any]) -> int:
        for s, schema in keyed:
            result = compare_values(schema, a[s.key], b[s.key])
            if result != 0:
                return -result if s.direction is SortDirection.DESC else result
        return 0

    ordered = list(records)
    for record in ordered:
        missing = [s.key for s, _ in keyed if s.key not in record]
        if missing:
            raise InvalidFilterError(f"Cannot sort record without attribute(s): {', '.join(missing)}")
    if keyed:
        ordered.sort(key=cmp_to_key(_compare))
    return ordered


def query_records(
    records: Iterable[dict[str, Any]],
    record_schema: RecordSchema,
    filters: Sequence[Filter] = (),
    sorts: Sequence[Sort] = (),
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Filter, then sort, then truncate to ``limit`` rows."""
    if limit is not None and limit < 0:
        raise InvalidFilterError(f"Limit must not be negative: {limit}")
    rows = apply_sorts(apply_filters(records, record_schema, filters), record_schema, sorts)
    return rows if limit is None else rows[:limit]
