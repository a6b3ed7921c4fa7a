"""The view compilation request.

``ViewRequest`` is the single input object of the compiler: the view name,
the tables in the workspace, the declared relationships, the selected fields
per table, and the namespace (cloud project) the view is created in.
"""
from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from semlayer.schema.snapshot import Relationship, TableInfo


class ViewRequest(BaseModel):
    """Input for one view compilation.

    Attributes:
        view_name: Name of the output view.
        tables: Tables in the workspace, in display order.
        relationships: Declared joins, in declaration order.  The first one
            anchors the base table.
        selected_fields: Table id to the ordered column names to expose.
        namespace: Target project.  Also accepted as ``projectId``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    view_name: str
    tables: list[TableInfo] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    selected_fields: dict[str, list[str]] = Field(default_factory=dict)
    namespace: str = Field(validation_alias=AliasChoices("namespace", "projectId"))

    @property
    def table_ids(self) -> list[str]:
        """Returns all table ids in input order."""
        return [t.id for t in self.tables]
