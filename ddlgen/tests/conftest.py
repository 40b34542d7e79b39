"""Pytest configuration and fixtures for ddlgen tests."""
from __future__ import annotations

from typing import Any, Iterable, Mapping
from unittest.mock import MagicMock

import pytest

from ddlgen.generator import PostgresSchemaGenerator, SchemaGenerator


def pytest_addoption(parser):
    """Add command-line option for integration tests."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that require database connections",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is given."""
    if config.getoption("--run-integration"):
        return
    skip = pytest.mark.skip(reason="needs --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


def fake_executor(rows: Iterable[Mapping[str, Any]] = ()) -> MagicMock:
    """Query executor mock returning canned rows.

    Reassign ``executor.rows`` to change what later queries return.
    """
    executor = MagicMock()
    executor.rows = list(rows)
    executor.side_effect = lambda sql: [dict(row) for row in executor.rows]
    return executor


def make_row(
    column_name: str,
    db_type: str,
    allow_null: str = "YES",
    column_default: Any = None,
    table_name: str | None = None,
    max_chars: int | None = None,
    numeric_precision: int | None = None,
) -> dict[str, Any]:
    """An information_schema row as returned by the introspection query."""
    row = {
        "column_name": column_name,
        "db_type": db_type,
        "max_chars": max_chars,
        "numeric_precision": numeric_precision,
        "column_default": column_default,
        "allow_null": allow_null,
    }
    if table_name is not None:
        row["table_name"] = table_name
    return row


@pytest.fixture
def gen() -> SchemaGenerator:
    """Generic generator (ANSI quoting, no index types or partial indexes)."""
    return SchemaGenerator()


@pytest.fixture
def pg() -> PostgresSchemaGenerator:
    """PostgreSQL generator."""
    return PostgresSchemaGenerator()
