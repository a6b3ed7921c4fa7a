"""BigQuery dialect."""

from __future__ import annotations

from semlayer.compile.base import ViewDialect


class BigQueryDialect(ViewDialect):
    """Renders views for BigQuery standard SQL.

    Table paths are wrapped whole in backticks (```project.dataset.table```)
    and used verbatim; table ids come from warehouse metadata.
    """

    @property
    def dialect_name(self) -> str:
        return "bigquery"

    def quote_identifier(self, name: str) -> str:
        return f"`{name}`"
