"""The editable view definition (workspace).

A ``ViewDefinition`` is what gets saved as view metadata and loaded back for
editing: the ids of the tables on the canvas, the declared relationships,
the selected fields per table, and the canvas layout of each table.  It
stores table *ids* only; table details are fetched again from the warehouse
and passed to :meth:`ViewDefinition.to_request` when the view is recompiled.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from semlayer.errors import DefinitionError, DuplicateRelationshipError
from semlayer.schema.request import ViewRequest
from semlayer.schema.snapshot import (
    Cardinality,
    JoinProposal,
    Relationship,
    TableInfo,
    relationship_id,
)

logger = logging.getLogger(__name__)


class TableState(BaseModel):
    """Canvas position and size of a table card.  Opaque to the compiler."""

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float
    width: float | str
    height: float | str


class ViewDefinition(BaseModel):
    """A semantic view as the user edits it.

    Attributes:
        tables: Table ids, in the order they were added.
        relationships: Declared relationships, in declaration order.
        selected_fields: Table id to the selected column names.
        table_states: Table id to canvas layout.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    tables: list[str] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    selected_fields: dict[str, list[str]] = Field(default_factory=dict)
    table_states: dict[str, TableState] = Field(default_factory=dict)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def add_table(self, table_id: str, state: TableState | None = None) -> None:
        """Add a table with an empty field selection.  Re-adding is a no-op."""
        if table_id in self.tables:
            return
        self.tables.append(table_id)
        self.selected_fields[table_id] = []
        if state is not None:
            self.table_states[table_id] = state

    def remove_table(self, table_id: str) -> None:
        """Remove a table together with its relationships, fields and layout."""
        self.tables = [t for t in self.tables if t != table_id]
        self.relationships = [
            r for r in self.relationships
            if r.from_table != table_id and r.to_table != table_id
        ]
        self.selected_fields.pop(table_id, None)
        self.table_states.pop(table_id, None)

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def select_field(self, table_id: str, field: str) -> None:
        current = self.selected_fields.setdefault(table_id, [])
        if field not in current:
            current.append(field)

    def deselect_field(self, table_id: str, field: str) -> None:
        current = self.selected_fields.get(table_id)
        if current is not None:
            self.selected_fields[table_id] = [f for f in current if f != field]

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def add_relationship(
        self,
        from_table: str,
        from_field: str,
        to_table: str,
        to_field: str,
        cardinality: Cardinality,
    ) -> Relationship:
        """Declare a relationship under its canonical id.

        Raises:
            DuplicateRelationshipError: If the same join is already declared.
        """
        rel = Relationship(
            id=relationship_id(from_table, from_field, to_table, to_field),
            from_table=from_table,
            from_field=from_field,
            to_table=to_table,
            to_field=to_field,
            cardinality=cardinality,
        )
        self._append_relationship(rel)
        return rel

    def accept_proposal(self, proposal: JoinProposal) -> Relationship:
        """Declare the relationship a join proposal suggests.

        Raises:
            DuplicateRelationshipError: If the same join is already declared.
        """
        rel = proposal.to_relationship()
        self._append_relationship(rel)
        return rel

    def update_relationship(self, index: int, relationship: Relationship) -> None:
        self._check_index(index)
        self.relationships[index] = relationship

    def remove_relationship(self, index: int) -> Relationship:
        self._check_index(index)
        return self.relationships.pop(index)

    def get_relationship(self, rel_id: str) -> Relationship | None:
        """Returns the relationship with the given id, or ``None``."""
        for rel in self.relationships:
            if rel.id == rel_id:
                return rel
        return None

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_request(
        self,
        view_name: str,
        tables: list[TableInfo],
        namespace: str,
    ) -> ViewRequest:
        """Build a compiler request from fetched table details.

        Args:
            view_name: Name of the view.
            tables: Details for the definition's tables, in any order.
                Details for tables not in the definition are ignored.
            namespace: Target project.

        Returns:
            A ``ViewRequest`` with tables in definition order.

        Raises:
            DefinitionError: If a definition table has no details.
        """
        by_id = {t.id: t for t in tables}
        missing = [t for t in self.tables if t not in by_id]
        if missing:
            raise DefinitionError(
                f"No table details for: {', '.join(missing)}.", table_ids=missing
            )
        return ViewRequest(
            view_name=view_name,
            tables=[by_id[t] for t in self.tables],
            relationships=list(self.relationships),
            selected_fields={k: list(v) for k, v in self.selected_fields.items()},
            namespace=namespace,
        )

    def to_config(self) -> dict[str, Any]:
        """Return the JSON-ready, camelCase metadata payload."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ViewDefinition:
        """Load a saved metadata payload.  Missing or null sections default to empty.

        Raises:
            DefinitionError: If the payload is not a valid view definition.
        """
        try:
            return cls.model_validate({k: v for k, v in config.items() if v is not None})
        except ValidationError as exc:
            raise DefinitionError(f"Saved view definition is invalid: {exc}") from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _append_relationship(self, rel: Relationship) -> None:
        if self.get_relationship(rel.id) is not None:
            raise DuplicateRelationshipError(rel.id)
        self.relationships.append(rel)
        logger.debug("Relationship %s added", rel.id)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.relationships):
            raise DefinitionError(
                f"Relationship index {index} out of range "
                f"(0..{len(self.relationships) - 1})."
            )
