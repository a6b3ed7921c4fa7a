"""Unit tests for the table, relationship and request models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from semlayer.schema.request import ViewRequest
from semlayer.schema.snapshot import JoinProposal, Relationship, TableInfo, relationship_id
from tests.fixtures import load_flights_request


def test_table_ignores_extra_warehouse_keys():
    table = TableInfo.model_validate(
        {
            "id": "p.d.t",
            "name": "t",
            "schema": [{"name": "a", "type": "STRING", "mode": "NULLABLE"}],
            "description": "",
            "location": "EU",
            "numBytes": "42",
            "numRows": "7",
            "timePartitioning": {"type": "DAY"},
        }
    )
    assert [c.name for c in table.schema_] == ["a"]
    assert table.size_bytes == 42.0


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [(None, 0.0), ("", 0.0), ("abc", 0.0), ("NaN", 0.0), ("1024", 1024.0), (2048, 2048.0)],
)
def test_table_size_bytes(num_bytes, expected):
    assert TableInfo(id="t", name="t", num_bytes=num_bytes).size_bytes == expected


def test_column_rejects_unknown_keys():
    with pytest.raises(ValidationError):
        TableInfo.model_validate(
            {"id": "t", "name": "t", "schema": [{"name": "a", "type": "INT64", "policy": "x"}]}
        )


def test_relationship_wire_and_python_names():
    wire = {
        "id": "r",
        "fromTable": "a",
        "fromField": "x",
        "toTable": "b",
        "toField": "y",
        "cardinality": "one-to-many",
    }
    rel = Relationship.model_validate(wire)
    assert rel == Relationship(
        id="r", from_table="a", from_field="x", to_table="b", to_field="y",
        cardinality="one-to-many",
    )
    assert rel.model_dump(by_alias=True) == wire
    assert rel.join_condition == "a.x = b.y"


def test_proposal_to_relationship():
    proposal = JoinProposal.model_validate(
        {
            "fromTable": "a", "fromField": "x", "toTable": "b", "toField": "y",
            "cardinality": "many-to-one", "reason": "names match",
        }
    )
    rel = proposal.to_relationship()
    assert rel.id == relationship_id("a", "x", "b", "y") == "a.x-b.y"
    assert rel.cardinality == "many-to-one"


def test_request_table_ids_keep_input_order():
    request = load_flights_request()
    assert request.table_ids == [
        "p.travel.flights_external",
        "p.travel.airports",
        "p.travel.airlines",
        "p.travel.weather",
    ]


def test_request_requires_namespace():
    with pytest.raises(ValidationError):
        ViewRequest.model_validate({"viewName": "v"})


def test_relationship_ignores_proposal_reason():
    rel = Relationship.model_validate(
        {
            "id": "a.x-b.y",
            "fromTable": "a",
            "fromField": "x",
            "toTable": "b",
            "toField": "y",
            "cardinality": "many-to-one",
            "reason": "x looks like a key of b",
        }
    )
    assert rel.model_dump(by_alias=True) == {
        "id": "a.x-b.y",
        "fromTable": "a",
        "fromField": "x",
        "toTable": "b",
        "toField": "y",
        "cardinality": "many-to-one",
    }
