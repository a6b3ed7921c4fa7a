"""Core view-definition → SQL compilation logic.

``ViewBuilder`` is the top-level orchestrator.  It picks the base table,
grows the join plan, then wires together the clause-level sub-builders to
render one ``CREATE OR REPLACE VIEW`` statement.

Sub-builder hierarchy
---------------------
ViewBuilder
  ├── pick_base_table / build_join_plan   (join_plan.py)
  ├── SelectClauseBuilder                 (clause_builders.py)
  ├── FromClauseBuilder                   (clause_builders.py)
  └── JoinClauseBuilder                   (clause_builders.py)

The builder never raises for a well-formed request.  Unreachable tables,
dangling relationship references and colliding column names all degrade to
"left out of the statement"; an empty workspace compiles to ``SELECT 1``.
Each ``build()`` call starts a fresh alias sequence, so one builder can be
shared between threads.
"""

from __future__ import annotations

import logging

from semlayer.compile.base import CompiledView, ViewDialect
from semlayer.compile.bigquery import BigQueryDialect
from semlayer.compile.clause_builders import (
    FromClauseBuilder,
    JoinClauseBuilder,
    SelectClauseBuilder,
)
from semlayer.compile.context import CompilationContext
from semlayer.compile.join_plan import build_join_plan, pick_base_table
from semlayer.compile.naming import AliasAllocator
from semlayer.config import ViewOptions
from semlayer.schema.request import ViewRequest

logger = logging.getLogger(__name__)


class ViewBuilder:
    """Compiles a view request to a ``CREATE OR REPLACE VIEW`` statement.

    Args:
        dialect: Warehouse dialect.  Defaults to :class:`BigQueryDialect`.
        options: Statement layout options.  Defaults to ``ViewOptions()``.
    """

    def __init__(
        self,
        dialect: ViewDialect | None = None,
        options: ViewOptions | None = None,
    ) -> None:
        self._dialect = dialect or BigQueryDialect()
        self._options = options or ViewOptions()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, request: ViewRequest) -> CompiledView:
        """Compile ``request`` to a view statement.

        Args:
            request: Tables, relationships and selected fields of the view.

        Returns:
            :class:`~semlayer.compile.base.CompiledView` with the statement
            and the resolved base table, columns and unreached tables.
        """
        ctx = CompilationContext.for_request(self._dialect, self._options, request)
        header = f"CREATE OR REPLACE VIEW {ctx.view_identifier} AS"
        view_id = f"{request.namespace}.{self._options.view_dataset}.{request.view_name}"

        if not request.tables:
            return CompiledView(sql=f"{header}\nSELECT 1;", view_id=view_id)

        base_table = pick_base_table(request.tables, request.relationships)
        plan = build_join_plan(
            base_table,
            request.tables,
            request.relationships,
            AliasAllocator(),
        )
        logger.debug(
            "View %s (%s): base table %s, %d join(s)",
            view_id,
            self._dialect.dialect_name,
            base_table.id,
            len(plan.entries),
        )

        select_builder = SelectClauseBuilder(ctx, plan)
        columns = select_builder.collect()

        parts = [
            header,
            select_builder.build(columns),
            FromClauseBuilder(ctx).build(plan),
        ]
        join_builder = JoinClauseBuilder(ctx)
        parts.extend(join_builder.build(entry) for entry in plan.entries)

        included = plan.included_tables
        return CompiledView(
            sql="\n".join(parts) + ";",
            view_id=view_id,
            base_table=base_table.id,
            columns=[c.output_name for c in columns],
            unreached_tables=[t for t in request.table_ids if t not in included],
        )
