import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from datalist.core.errors import RecordLoadError
from datalist.models import RecordSchema, Schema, TypeTag

logger = logging.getLogger(__name__)

_record_schema_adapter = TypeAdapter(RecordSchema)


def _read_json(path: str | Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise RecordLoadError(f"Cannot read JSON from {str(path)!r}: {exc}") from exc


def load_record_schema(path: str | Path) -> RecordSchema:
    """Load an ``{attribute: schema}`` mapping from a JSON file."""
    try:
        return _record_schema_adapter.validate_python(_read_json(path))
    except ValidationError as exc:
        raise RecordLoadError(f"Invalid record schema in {str(path)!r}: {exc}") from exc


def conforms(schema: Schema, value: Any) -> bool:
    """Return whether a decoded JSON value has the shape its schema declares."""
    match schema.type:
        case TypeTag.STRING:
            return isinstance(value, str)
        case TypeTag.BOOL:
            return isinstance(value, bool)
        case TypeTag.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        case TypeTag.FLOAT:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        case TypeTag.SET if schema.elem is not None and schema.elem.type is TypeTag.LIST:
            return False
        case TypeTag.LIST | TypeTag.SET if schema.elem is not None:
            return isinstance(value, list) and all(conforms(schema.elem, item) for item in value)
    return False


def shape_value(schema: Schema, value: Any) -> Any:
    """Convert a decoded JSON value into the runtime shape its schema expects."""
    match schema.type:
        case TypeTag.FLOAT if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        case TypeTag.LIST if isinstance(value, list) and schema.elem is not None:
            return [shape_value(schema.elem, item) for item in value]
        case TypeTag.SET if isinstance(value, list) and schema.elem is not None:
            return frozenset(shape_value(schema.elem, item) for item in value)
    return value


def load_records(path: str | Path, record_schema: RecordSchema) -> list[dict[str, Any]]:
    data = _read_json(path)
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise RecordLoadError(f"Expected a JSON array of objects in {str(path)!r}")

    for index, item in enumerate(data):
        for key, value in item.items():
            if key in record_schema and not conforms(record_schema[key], value):
                raise RecordLoadError(
                    f"Record {index} in {str(path)!r}: {key!r} is not a valid "
                    f"{record_schema[key].type.value} value: {value!r}"
                )

    records = [
        {key: shape_value(record_schema[key], value) if key in record_schema else value for key, value in item.items()}
        for item in data
    ]
    logger.debug("Loaded %d record(s) from %s", len(records), path)
    return records
