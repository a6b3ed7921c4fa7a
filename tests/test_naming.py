"""Unit tests for alias allocation and output column naming."""

from __future__ import annotations

import pytest

from semlayer.compile.naming import (
    AliasAllocator,
    base_column_name,
    clean_table_name,
    join_key_name,
    joined_column_name,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("flights_external", "flights"),
        ("flights", "flights"),
        ("flights_EXTERNAL", "flights_EXTERNAL"),
        ("external_flights", "external_flights"),
        ("flights_external_v2", "flights_external_v2"),
    ],
)
def test_clean_table_name(name, expected):
    assert clean_table_name(name) == expected


@pytest.mark.parametrize(
    ("field", "expected"),
    [
        ("user_id", "user"),
        ("USER_ID", "USER"),
        ("country_code", "country"),
        ("Country_Code", "Country"),
        ("origin_airport", "origin_"),
        ("OriginAirport", "Origin"),
        ("origin_airport_code", "origin_"),
        ("id", "id"),
        ("identifier", "identifier"),
        ("user_id_hash", "user_id_hash"),
    ],
)
def test_join_key_name(field, expected):
    assert join_key_name(field) == expected


def test_base_column_name_strips_external():
    assert base_column_name("orders_external", "total") == "orders_total"


def test_joined_column_name():
    assert joined_column_name("orders", "user_id", "users", "email") == "orders_user_users_email"
    assert (
        joined_column_name("flights_external", "carrier_code", "carriers_external", "name")
        == "flights_carrier_carriers_name"
    )


class TestAliasAllocator:
    def test_sequence_starts_at_a(self):
        aliases = AliasAllocator()
        assert [aliases.next() for _ in range(3)] == ["a", "b", "c"]
        assert aliases.issued == 3

    def test_extends_past_z_with_cycle_suffix(self):
        aliases = AliasAllocator()
        issued = [aliases.next() for _ in range(80)]
        assert issued[25] == "z"
        assert issued[26] == "a1"
        assert issued[51] == "z1"
        assert issued[52] == "a2"
        assert len(set(issued)) == 80

    def test_fresh_allocator_restarts(self):
        first = AliasAllocator()
        first.next()
        assert AliasAllocator().next() == "a"
