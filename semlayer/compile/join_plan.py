"""Base-table selection and join-plan closure.

The join plan is grown from the base table by repeated passes over the
declared relationships: a relationship is applied once its ``from_table`` is
in the plan and its ``to_table`` is one of the input tables.  Passes stop
when one adds nothing.  Traversal only follows the declared direction, so a
relationship pointing *into* the connected component from outside it is
never applied, and tables only reachable through it are left out.

Every applied relationship gets its own destination alias, even when the
same table is reached twice; the two join instances stay distinguishable.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from semlayer.compile.naming import AliasAllocator
from semlayer.schema.snapshot import Relationship, TableInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinPlanEntry:
    """One resolved edge of the join plan.

    Attributes:
        relationship: The declared relationship being joined.
        from_alias: Alias of the table the join starts from.
        to_alias: Fresh alias of the joined table instance.
    """

    relationship: Relationship
    from_alias: str
    to_alias: str


@dataclass
class JoinPlan:
    """The base table, its alias, and the joins reachable from it.

    Attributes:
        base_table: Table placed in the FROM clause.
        base_alias: Alias of the base table.
        entries: Joins in the order they were added.
        table_aliases: Table id to the alias under which the table first
            entered the plan.
    """

    base_table: TableInfo
    base_alias: str
    entries: list[JoinPlanEntry] = field(default_factory=list)
    table_aliases: dict[str, str] = field(default_factory=dict)

    @property
    def included_tables(self) -> set[str]:
        return set(self.table_aliases)

    def entry_for(self, table_id: str) -> JoinPlanEntry | None:
        """Returns the first entry that joins ``table_id`` in, or ``None``."""
        for entry in self.entries:
            if entry.relationship.to_table == table_id:
                return entry
        return None


def pick_base_table(
    tables: list[TableInfo],
    relationships: list[Relationship],
) -> TableInfo:
    """Choose the table for the FROM clause.

    The ``from_table`` of the first relationship wins.  Without relationships
    (or when that table is not in ``tables``) the largest table by
    ``num_bytes`` wins, the earliest one on ties.

    Args:
        tables: Input tables; must not be empty.
        relationships: Declared relationships in caller order.

    Returns:
        The base table.
    """
    if relationships:
        anchor = relationships[0].from_table
        for table in tables:
            if table.id == anchor:
                return table
        logger.debug(
            "First relationship %r starts at unknown table %r; using largest table",
            relationships[0].id,
            anchor,
        )
    # max() keeps the first of equal keys.
    return max(tables, key=lambda t: t.size_bytes)


def build_join_plan(
    base_table: TableInfo,
    tables: list[TableInfo],
    relationships: list[Relationship],
    aliases: AliasAllocator,
) -> JoinPlan:
    """Grow the join plan from ``base_table`` until no relationship applies.

    Args:
        base_table: Table the closure starts from.
        tables: All input tables; relationships to other ids never apply.
        relationships: Declared relationships; not mutated.
        aliases: Allocator for this compilation.  The base table takes the
            next alias.

    Returns:
        The resulting :class:`JoinPlan`.
    """
    known_ids = {t.id for t in tables}
    base_alias = aliases.next()
    plan = JoinPlan(
        base_table=base_table,
        base_alias=base_alias,
        table_aliases={base_table.id: base_alias},
    )

    pending = list(relationships)
    added = True
    while added:
        added = False
        remaining: list[Relationship] = []
        for rel in pending:
            if rel.from_table in plan.table_aliases and rel.to_table in known_ids:
                to_alias = aliases.next()
                plan.entries.append(
                    JoinPlanEntry(
                        relationship=rel,
                        from_alias=plan.table_aliases[rel.from_table],
                        to_alias=to_alias,
                    )
                )
                plan.table_aliases.setdefault(rel.to_table, to_alias)
                added = True
            else:
                remaining.append(rel)
        pending = remaining

    for rel in pending:
        logger.debug(
            "Relationship %r (%s) not reachable from %r; skipped",
            rel.id,
            rel.join_condition,
            base_table.id,
        )
    return plan
