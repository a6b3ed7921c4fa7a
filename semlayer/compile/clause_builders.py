"""Clause-level SQL builders.

Each class handles exactly one part of the view statement.

Classes
-------
SelectClauseBuilder   : ``SELECT <alias>.<field> AS <name>, ...``
FromClauseBuilder     : ``FROM <base table> AS <alias>``
JoinClauseBuilder     : ``LEFT JOIN <table> AS <alias> ON ...``
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from semlayer.compile.context import CompilationContext
from semlayer.compile.join_plan import JoinPlan, JoinPlanEntry
from semlayer.compile.naming import base_column_name, joined_column_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectedColumn:
    """One item of the SELECT list.

    Attributes:
        table_alias: Alias of the table instance the column is read from.
        field: Source column name.
        output_name: Column name in the view.
    """

    table_alias: str
    field: str
    output_name: str

    @property
    def sql(self) -> str:
        return f"{self.table_alias}.{self.field} AS {self.output_name}"


class SelectClauseBuilder:
    """Resolves selected fields against the join plan and renders ``SELECT``.

    Tables are visited in request order and fields in their declared order.
    Fields of tables outside the join plan are skipped, and a field whose
    output name was already produced is dropped.
    """

    def __init__(self, ctx: CompilationContext, plan: JoinPlan) -> None:
        self._ctx = ctx
        self._plan = plan

    def collect(self) -> list[SelectedColumn]:
        columns: list[SelectedColumn] = []
        seen: set[str] = set()
        selected = self._ctx.request.selected_fields

        for table in self._ctx.request.tables:
            for field in selected.get(table.id) or []:
                column = self._resolve(table.id, field)
                if column is None:
                    continue
                if column.output_name in seen:
                    logger.debug("Duplicate output column %r dropped", column.output_name)
                    continue
                seen.add(column.output_name)
                columns.append(column)
        return columns

    def build(self, columns: list[SelectedColumn]) -> str:
        indent = self._ctx.options.indent
        if columns:
            items = [f"{indent}{c.sql}" for c in columns]
        else:
            items = [f"{indent}1 as {self._ctx.options.placeholder_column}"]
        return "SELECT\n" + ",\n".join(items)

    def _resolve(self, table_id: str, field: str) -> SelectedColumn | None:
        plan = self._plan
        if table_id == plan.base_table.id:
            return SelectedColumn(
                table_alias=plan.base_alias,
                field=field,
                output_name=base_column_name(plan.base_table.name, field),
            )

        entry = plan.entry_for(table_id)
        if entry is None:
            return None
        rel = entry.relationship
        tables = self._ctx.tables_by_id
        return SelectedColumn(
            table_alias=entry.to_alias,
            field=field,
            output_name=joined_column_name(
                tables[rel.from_table].name,
                rel.from_field,
                tables[rel.to_table].name,
                field,
            ),
        )


class FromClauseBuilder:
    """Builds the ``FROM`` fragment for the base table."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, plan: JoinPlan) -> str:
        table_sql = self._ctx.dialect.quote_identifier(plan.base_table.id)
        return f"FROM\n{self._ctx.options.indent}{table_sql} AS {plan.base_alias}"


class JoinClauseBuilder:
    """Builds a single ``LEFT JOIN … ON …`` fragment.

    Declared cardinality does not change the join type.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, entry: JoinPlanEntry) -> str:
        rel = entry.relationship
        table_sql = self._ctx.dialect.quote_identifier(rel.to_table)
        return (
            f"LEFT JOIN {table_sql} AS {entry.to_alias} "
            f"ON {entry.from_alias}.{rel.from_field} = {entry.to_alias}.{rel.to_field}"
        )
