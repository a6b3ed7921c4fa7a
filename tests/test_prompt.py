"""Unit tests for the join-proposal prompt builder and answer parsing."""

from __future__ import annotations

import json

import pytest

from semlayer.errors import ParseError, ProposalParseError
from semlayer.prompt.builder import JoinPromptBuilder, parse_join_proposals, propose_joins
from tests.fixtures import make_table

USERS = make_table("p.d.users", ["id", "email"])
ORDERS = make_table("p.d.orders", ["id", "user_id"])
TABLES = [USERS, ORDERS]


def _answer(*proposals: dict) -> str:
    return json.dumps({"proposals": list(proposals)})


def _proposal(from_table="p.d.orders", to_table="p.d.users", **extra) -> dict:
    return {
        "fromTable": from_table,
        "fromField": "user_id",
        "toTable": to_table,
        "toField": "id",
        "cardinality": "many-to-one",
        "reason": "user_id matches users.id",
        **extra,
    }


def test_system_prompt_lists_tables_and_columns():
    components = JoinPromptBuilder(TABLES).build()
    assert "- Table Name: users (ID: p.d.users)" in components.system_prompt
    assert "  - user_id (STRING)" in components.system_prompt


def test_system_prompt_lists_cardinalities():
    components = JoinPromptBuilder(TABLES).build()
    assert "one-to-one, one-to-many, many-to-one, many-to-many" in components.system_prompt
    assert "Only propose joins between different tables" in components.system_prompt


def test_user_prompt_counts_tables():
    assert "2 tables" in JoinPromptBuilder(TABLES).build().user_prompt


def test_tables_json_defaults_mode():
    data = json.loads(JoinPromptBuilder(TABLES).build().tables_json)
    assert [t["id"] for t in data] == ["p.d.users", "p.d.orders"]
    assert data[0]["schema"][0] == {"name": "id", "type": "STRING", "mode": "NULLABLE"}


class TestParseJoinProposals:
    def test_valid_answer(self):
        proposals = parse_join_proposals(_answer(_proposal()), TABLES)
        assert len(proposals) == 1
        assert proposals[0].relationship_id == "p.d.orders.user_id-p.d.users.id"
        assert proposals[0].reason == "user_id matches users.id"

    def test_self_join_and_unknown_tables_dropped(self):
        answer = _answer(
            _proposal(to_table="p.d.orders"),
            _proposal(to_table="p.x.ghost"),
            _proposal(),
        )
        proposals = parse_join_proposals(answer, TABLES)
        assert [p.to_table for p in proposals] == ["p.d.users"]

    def test_invalid_json(self):
        with pytest.raises(ProposalParseError) as exc_info:
            parse_join_proposals("```json\n{}```", TABLES)
        assert isinstance(exc_info.value, ParseError)

    def test_invalid_shape(self):
        with pytest.raises(ProposalParseError):
            parse_join_proposals(_answer(_proposal(cardinality="lots")), TABLES)
        with pytest.raises(ProposalParseError):
            parse_join_proposals('{"joins": []}', TABLES)


class TestProposeJoins:
    def test_fewer_than_two_tables_skips_model(self):
        def generate(_components):
            raise AssertionError("model must not be called")

        assert propose_joins([USERS], generate) == []

    def test_calls_model_with_prompt(self):
        seen = []

        def generate(components):
            seen.append(components)
            return _answer(_proposal())

        proposals = propose_joins(TABLES, generate)
        assert len(seen) == 1
        assert "p.d.orders" in seen[0].system_prompt
        assert proposals[0].to_relationship().from_field == "user_id"
