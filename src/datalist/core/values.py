"""Typed value matching and ordering.

Both entry points dispatch on the declared ``TypeTag`` of a ``Schema`` and
assume the value has already been shaped to that schema. Collections recurse
into their element schema; nesting is expected to be shallow (one level in
practice) and is not guarded.
"""

import math
import re
from collections.abc import Set
from typing import Any

from datalist.core.errors import InvalidValueError, UnsupportedSortTypeError
from datalist.models import MatchMode, Schema, TypeTag

FLOAT_EPSILON = 1e-6


def approx_equals(a: float, b: float) -> bool:
    return abs(a - b) < FLOAT_EPSILON


def _expect(value: Any, tag: TypeTag, types: type | tuple[type, ...]) -> None:
    if not isinstance(value, types) or (tag is not TypeTag.BOOL and isinstance(value, bool)):
        raise TypeError(f"expected {tag.value} value, got {type(value).__name__}")


def _match_string(value: str, filter_value: Any, mode: MatchMode) -> bool:
    _expect(value, TypeTag.STRING, str)
    if mode is MatchMode.SUBSTRING:
        return filter_value in value
    if mode is MatchMode.RE:
        pattern = filter_value if isinstance(filter_value, re.Pattern) else re.compile(filter_value)
        return pattern.search(value) is not None
    return filter_value.lower() == value.lower()


def _match_int(value: int, filter_value: int, mode: MatchMode) -> bool:
    _expect(value, TypeTag.INT, int)
    match mode:
        case MatchMode.LESS_THAN:
            return value < filter_value
        case MatchMode.LESS_THAN_OR_EQUAL:
            return value <= filter_value
        case MatchMode.GREATER_THAN:
            return value > filter_value
        case MatchMode.GREATER_THAN_OR_EQUAL:
            return value >= filter_value
    return value == filter_value


def _match_float(value: float, filter_value: float, mode: MatchMode) -> bool:
    _expect(value, TypeTag.FLOAT, (float, int))
    # 0.0 means "not set" and never satisfies a relational filter.
    match mode:
        case MatchMode.LESS_THAN:
            return value != 0.0 and value < filter_value
        case MatchMode.LESS_THAN_OR_EQUAL:
            return value != 0.0 and (value < filter_value or approx_equals(filter_value, value))
        case MatchMode.GREATER_THAN:
            return value != 0.0 and value > filter_value
        case MatchMode.GREATER_THAN_OR_EQUAL:
            return value != 0.0 and (value > filter_value or approx_equals(filter_value, value))
    return approx_equals(filter_value, value)


def value_matches(schema: Schema, value: Any, filter_value: Any, match_by: MatchMode | str | None = "") -> bool:
    """Return whether ``value`` satisfies ``filter_value`` under ``match_by``.

    Modes that do not apply to the schema's type fall back to that type's
    equality test; collections match when any element matches.
    """
    mode = MatchMode.parse(match_by)
    match schema.type:
        case TypeTag.STRING:
            return _match_string(value, filter_value, mode)
        case TypeTag.BOOL:
            _expect(value, TypeTag.BOOL, bool)
            return filter_value == value
        case TypeTag.INT:
            return _match_int(value, filter_value, mode)
        case TypeTag.FLOAT:
            return _match_float(value, filter_value, mode)
        case TypeTag.LIST:
            _expect(value, TypeTag.LIST, (list, tuple))
            return any(value_matches(schema.elem, item, filter_value, mode) for item in value)
        case TypeTag.SET:
            _expect(value, TypeTag.SET, Set)
            return any(value_matches(schema.elem, item, filter_value, mode) for item in value)
    return False


def _three_way(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_values(schema: Schema, value1: Any, value2: Any) -> int:
    """Order two values of the same schema, returning -1, 0 or 1.

    Raises ``UnsupportedSortTypeError`` for collection types, which have no
    ordering, and ``InvalidValueError`` when a float operand is NaN.
    """
    match schema.type:
        case TypeTag.STRING:
            _expect(value1, TypeTag.STRING, str)
            _expect(value2, TypeTag.STRING, str)
            return _three_way(value1, value2)
        case TypeTag.BOOL:
            _expect(value1, TypeTag.BOOL, bool)
            _expect(value2, TypeTag.BOOL, bool)
            return _three_way(value1, value2)
        case TypeTag.INT:
            _expect(value1, TypeTag.INT, int)
            _expect(value2, TypeTag.INT, int)
            return _three_way(value1, value2)
        case TypeTag.FLOAT:
            _expect(value1, TypeTag.FLOAT, (float, int))
            _expect(value2, TypeTag.FLOAT, (float, int))
            if math.isnan(value1) or math.isnan(value2):
                raise InvalidValueError("cannot order NaN float values")
            if approx_equals(value1, value2):
                return 0
            # Equal infinities fall through to 0.
            return _three_way(value1, value2)
    tag = schema.type.value if isinstance(schema.type, TypeTag) else schema.type
    raise UnsupportedSortTypeError(f"unsupported value type for sort: {tag}")
