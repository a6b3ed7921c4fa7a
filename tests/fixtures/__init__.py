"""Test fixtures: a sample flights view request, its expected SQL, and
small table/relationship factories."""

from __future__ import annotations

import json
from pathlib import Path

from semlayer.schema.request import ViewRequest
from semlayer.schema.snapshot import ColumnInfo, Relationship, TableInfo

_FIXTURES_DIR = Path(__file__).parent


def load_request_json() -> str:
    """Return the raw flights view request JSON."""
    return (_FIXTURES_DIR / "flights_request.json").read_text()


def load_flights_request() -> ViewRequest:
    """Load the flights view request as a ViewRequest."""
    return ViewRequest.model_validate(json.loads(load_request_json()))


def load_expected_sql() -> str:
    """Return the expected statement for the flights request."""
    return (_FIXTURES_DIR / "flight_facts.sql").read_text().rstrip("\n")


def make_table(table_id: str, columns: list[str] | None = None, num_bytes=None) -> TableInfo:
    """Build a table whose display name is the last segment of its id."""
    return TableInfo(
        id=table_id,
        name=table_id.rsplit(".", 1)[-1],
        schema=[ColumnInfo(name=c, type="STRING") for c in columns or []],
        num_bytes=num_bytes,
    )


def make_rel(
    from_table: str,
    from_field: str,
    to_table: str,
    to_field: str,
    rel_id: str | None = None,
    cardinality: str = "many-to-one",
) -> Relationship:
    return Relationship(
        id=rel_id or f"{from_table}.{from_field}-{to_table}.{to_field}",
        from_table=from_table,
        from_field=from_field,
        to_table=to_table,
        to_field=to_field,
        cardinality=cardinality,
    )
