"""Compiler abstractions: CompiledView and the ViewDialect ABC.

``ViewDialect`` isolates the warehouse-specific pieces of the generated
statement (identifier quoting).  ``BigQueryDialect`` is the only built-in
implementation.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class CompiledView:
    """The output of a view compilation.

    Attributes:
        sql: The complete ``CREATE OR REPLACE VIEW ...;`` statement.
        view_id: Fully qualified id of the view being created.
        base_table: Id of the table in the FROM clause, or ``None`` when the
            workspace was empty.
        columns: Output column names in SELECT order.
        unreached_tables: Input table ids the join plan never reached.  They
            contribute no joins and no columns.
    """

    sql: str
    view_id: str
    base_table: str | None = None
    columns: list[str] = field(default_factory=list)
    unreached_tables: list[str] = field(default_factory=list)

    def to_response(self) -> dict[str, str]:
        """Return the wire response ``{"sqlQuery": ...}``."""
        return {"sqlQuery": self.sql}


class ViewDialect(ABC):
    """Abstract base for warehouse-specific view rendering."""

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a quoted identifier.

        Args:
            name: Unquoted, possibly dotted identifier (``project.dataset.table``).

        Returns:
            Quoted identifier.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name."""

    def view_identifier(self, namespace: str, dataset: str, view_name: str) -> str:
        """Return the quoted id of the view ``namespace.dataset.view_name``."""
        return self.quote_identifier(f"{namespace}.{dataset}.{view_name}")
