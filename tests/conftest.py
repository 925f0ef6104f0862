"""Shared fixtures and helpers for tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from datalist.models import RecordSchema, Schema, TypeTag

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def record_schema() -> RecordSchema:
    """Return the attribute schema of the sample device records."""
    return {
        "name": Schema(type=TypeTag.STRING),
        "enabled": Schema(type=TypeTag.BOOL),
        "ports": Schema(type=TypeTag.INT),
        "price": Schema(type=TypeTag.FLOAT),
        "tags": Schema(type=TypeTag.LIST, elem=Schema(type=TypeTag.STRING)),
        "regions": Schema(type=TypeTag.SET, elem=Schema(type=TypeTag.STRING)),
    }


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """Return a handful of device records shaped to ``record_schema``."""
    return [
        {
            "name": "Router-A",
            "enabled": True,
            "ports": 8,
            "price": 120.5,
            "tags": ["edge", "core"],
            "regions": frozenset({"eu-west", "us-east"}),
        },
        {
            "name": "switch-b",
            "enabled": False,
            "ports": 24,
            "price": 0.0,
            "tags": ["access"],
            "regions": frozenset({"us-east"}),
        },
        {
            "name": "Firewall-C",
            "enabled": True,
            "ports": 4,
            "price": 980.0,
            "tags": [],
            "regions": frozenset({"ap-south"}),
        },
        {
            "name": "router-d",
            "enabled": True,
            "ports": 8,
            "price": 75.25,
            "tags": ["edge"],
            "regions": frozenset(),
        },
    ]


@pytest.fixture
def records_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write a schema file and a records file; return (records_path, schema_path)."""
    schema_path = tmp_path / "schema.json"
    schema_path.write_text(
        json.dumps(
            {
                "name": {"type": "string"},
                "ports": {"type": "int"},
                "price": {"type": "float"},
                "regions": {"type": "set", "elem": {"type": "string"}},
            }
        ),
        encoding="utf-8",
    )
    records_path = tmp_path / "records.json"
    records_path.write_text(
        json.dumps(
            [
                {"name": "alpha", "ports": 8, "price": 10, "regions": ["eu", "us"]},
                {"name": "beta", "ports": 24, "price": 2.5, "regions": ["us"]},
                {"name": "gamma", "ports": 4, "price": 0, "regions": ["ap"]},
            ]
        ),
        encoding="utf-8",
    )
    return records_path, schema_path
