class DatalistError(Exception):
    """Base class for errors raised by datalist."""


class InvalidFilterError(DatalistError, ValueError):
    """Raised when a filter or sort cannot be applied to the record schema."""


class InvalidValueError(DatalistError, ValueError):
    """Raised when a value cannot take part in a comparison (e.g. NaN)."""


class UnsupportedSortTypeError(DatalistError, TypeError):
    """Raised when ordering is requested for a type that has no ordering."""


class RecordLoadError(DatalistError, ValueError):
    """Raised when a records or schema file cannot be loaded."""
