"""Compilation context value object.

Packages the ``(dialect, options, request)`` data clump shared by
``ViewBuilder`` and all clause-level sub-builders into a single object.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from semlayer.compile.base import ViewDialect
from semlayer.config import ViewOptions
from semlayer.schema.request import ViewRequest
from semlayer.schema.snapshot import TableInfo


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single compilation run.

    Attributes:
        dialect: Warehouse dialect used for quoting.
        options: Statement layout options.
        request: The view request being compiled.
        tables_by_id: Lookup of the request's tables by id.
    """

    dialect: ViewDialect
    options: ViewOptions
    request: ViewRequest
    tables_by_id: dict[str, TableInfo] = field(default_factory=dict)

    @classmethod
    def for_request(
        cls,
        dialect: ViewDialect,
        options: ViewOptions,
        request: ViewRequest,
    ) -> CompilationContext:
        return cls(
            dialect=dialect,
            options=options,
            request=request,
            tables_by_id={t.id: t for t in request.tables},
        )

    @property
    def view_identifier(self) -> str:
        return self.dialect.view_identifier(
            self.request.namespace,
            self.options.view_dataset,
            self.request.view_name,
        )
