"""semlayer schema models: tables, relationships, requests, definitions."""
from semlayer.schema.definition import TableState, ViewDefinition
from semlayer.schema.request import ViewRequest
from semlayer.schema.snapshot import (
    CARDINALITIES,
    Cardinality,
    ColumnInfo,
    JoinProposal,
    Relationship,
    TableInfo,
    relationship_id,
)

__all__ = [
    "CARDINALITIES",
    "Cardinality",
    "ColumnInfo",
    "JoinProposal",
    "Relationship",
    "TableInfo",
    "TableState",
    "ViewDefinition",
    "ViewRequest",
    "relationship_id",
]
