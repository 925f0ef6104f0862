from datalist.core.errors import (
    DatalistError,
    InvalidFilterError,
    InvalidValueError,
    RecordLoadError,
    UnsupportedSortTypeError,
)
from datalist.core.filters import apply_filters, apply_sorts, parse_filter_values, query_records
from datalist.core.loading import load_record_schema, load_records
from datalist.core.values import FLOAT_EPSILON, approx_equals, compare_values, value_matches

__all__ = [
    "FLOAT_EPSILON",
    "DatalistError",
    "InvalidFilterError",
    "InvalidValueError",
    "RecordLoadError",
    "UnsupportedSortTypeError",
    "apply_filters",
    "apply_sorts",
    "approx_equals",
    "compare_values",
    "load_record_schema",
    "load_records",
    "parse_filter_values",
    "query_records",
    "value_matches",
]
