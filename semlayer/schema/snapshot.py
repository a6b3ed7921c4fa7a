"""Pydantic models for the tables and relationships a view is built from.

Tables are produced by the caller (usually from warehouse metadata) and
relationships are declared by the user or accepted from join proposals.
Attributes are snake_case; the JSON wire format used by the UI and the
persisted view metadata is camelCase (``fromTable``, ``numBytes``), and
models accept either spelling.
"""
from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Cardinality = Literal["one-to-one", "one-to-many", "many-to-one", "many-to-many"]

CARDINALITIES: tuple[str, ...] = (
    "one-to-one",
    "one-to-many",
    "many-to-one",
    "many-to-many",
)


def relationship_id(from_table: str, from_field: str, to_table: str, to_field: str) -> str:
    """Return the canonical relationship id ``from.field-to.field``."""
    return f"{from_table}.{from_field}-{to_table}.{to_field}"


class ColumnInfo(BaseModel):
    """Metadata for a single column.

    Attributes:
        name: Column name.
        type: Warehouse type string (e.g. ``'STRING'``, ``'INT64'``).  Never
            interpreted by the compiler.
        mode: Optional column mode (``'NULLABLE'``, ``'REQUIRED'``,
            ``'REPEATED'``).
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    mode: str | None = None


class TableInfo(BaseModel):
    """A queryable relation that can take part in a semantic view.

    Warehouse metadata usually carries more keys than these (row counts,
    partitioning, timestamps); they are ignored.

    Attributes:
        id: Namespaced id (``project.dataset.table``), quoted verbatim in SQL.
        name: Display name, used for output column prefixes.
        schema: Ordered column metadata.
        description: Free-text description.
        location: Warehouse location (e.g. ``'US'``).
        num_bytes: Table size as reported by the warehouse, usually a
            numeric string.  Only used to pick a default base table.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    name: str
    # ``schema`` shadows a deprecated BaseModel attribute; it is the wire name.
    schema_: list[ColumnInfo] = Field(default_factory=list, alias="schema")
    description: str = ""
    location: str = ""
    num_bytes: str | int | float | None = None

    @property
    def size_bytes(self) -> float:
        """``num_bytes`` as a number; missing or unparseable sizes are 0."""
        try:
            size = float(self.num_bytes or 0)
        except (TypeError, ValueError):
            return 0.0
        return 0.0 if math.isnan(size) else size


class Relationship(BaseModel):
    """A declared, directed join between two tables.

    Attributes:
        id: Unique relationship identifier.
        from_table: Id of the table the join starts from.
        from_field: Join column on ``from_table``.
        to_table: Id of the table being joined in.
        to_field: Join column on ``to_table``.
        cardinality: Declared cardinality.  Documentation only; every join
            compiles to ``LEFT JOIN``.

    Relationships accepted from join proposals may still carry the
    proposal's ``reason``; such extra keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    from_table: str
    from_field: str
    to_table: str
    to_field: str
    cardinality: Cardinality

    @property
    def join_condition(self) -> str:
        """Human-readable ``from.field = to.field`` form."""
        return f"{self.from_table}.{self.from_field} = {self.to_table}.{self.to_field}"


class JoinProposal(BaseModel):
    """A relationship suggested by the join-proposal model.

    Attributes:
        from_table: Source table id.
        from_field: Source join column.
        to_table: Target table id.
        to_field: Target join column.
        cardinality: Proposed cardinality.
        reason: Short explanation from the model.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    from_table: str
    from_field: str
    to_table: str
    to_field: str
    cardinality: Cardinality
    reason: str = ""

    @property
    def relationship_id(self) -> str:
        return relationship_id(self.from_table, self.from_field, self.to_table, self.to_field)

    def to_relationship(self) -> Relationship:
        """Returns the accepted proposal as a Relationship with its canonical id."""
        return Relationship(
            id=self.relationship_id,
            from_table=self.from_table,
            from_field=self.from_field,
            to_table=self.to_table,
            to_field=self.to_field,
            cardinality=self.cardinality,
        )
