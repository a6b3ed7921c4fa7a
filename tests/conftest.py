"""Shared pytest fixtures for semlayer tests."""
from __future__ import annotations

import pytest

from semlayer.schema.request import ViewRequest
from tests.fixtures import load_flights_request, make_rel, make_table


@pytest.fixture
def flights_request() -> ViewRequest:
    """The sample flights request (fresh copy per test)."""
    return load_flights_request()


@pytest.fixture
def users_orders() -> ViewRequest:
    """Two tables joined ``orders.user_id -> users.id``."""
    return ViewRequest(
        view_name="test_view",
        tables=[
            make_table("p.d.users", ["id", "email"]),
            make_table("p.d.orders", ["id", "user_id"]),
        ],
        relationships=[make_rel("p.d.orders", "user_id", "p.d.users", "id", rel_id="rel1")],
        selected_fields={"p.d.users": ["email"], "p.d.orders": ["id"]},
        namespace="test-project",
    )
