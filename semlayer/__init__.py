"""semlayer: semantic view compilation for BigQuery.

Turn a set of tables, declared relationships and selected fields into one
deterministic ``CREATE OR REPLACE VIEW`` statement.

Public API
----------
``generate_view_sql``
    Compile plain arguments to the SQL statement string.

``compile_view``
    Compile a :class:`ViewRequest` to a :class:`CompiledView`.

``compile_view_json``
    Parse a JSON request string and compile it.

Re-exported types
-----------------
``ViewRequest``, ``TableInfo``, ``ColumnInfo``, ``Relationship``,
``JoinProposal``, ``ViewDefinition``, ``ViewOptions``, ``CompiledView``,
``JoinPromptBuilder`` and all error classes.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from semlayer.compile.base import CompiledView, ViewDialect
from semlayer.compile.bigquery import BigQueryDialect
from semlayer.compile.builder import ViewBuilder
from semlayer.config import ViewOptions
from semlayer.errors import (
    ConfigError,
    DefinitionError,
    DuplicateRelationshipError,
    ParseError,
    ProposalParseError,
    SemLayerError,
)
from semlayer.prompt.builder import (
    JoinPromptBuilder,
    PromptComponents,
    parse_join_proposals,
    propose_joins,
)
from semlayer.schema.definition import TableState, ViewDefinition
from semlayer.schema.request import ViewRequest
from semlayer.schema.snapshot import (
    ColumnInfo,
    JoinProposal,
    Relationship,
    TableInfo,
    relationship_id,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core pipeline
    "generate_view_sql",
    "compile_view",
    "compile_view_json",
    # Schema types
    "ViewRequest",
    "TableInfo",
    "ColumnInfo",
    "Relationship",
    "JoinProposal",
    "relationship_id",
    # Workspace
    "ViewDefinition",
    "TableState",
    # Compilation
    "CompiledView",
    "ViewBuilder",
    "ViewDialect",
    "BigQueryDialect",
    "ViewOptions",
    # Prompting
    "JoinPromptBuilder",
    "PromptComponents",
    "parse_join_proposals",
    "propose_joins",
    # Errors
    "SemLayerError",
    "ParseError",
    "ProposalParseError",
    "ConfigError",
    "DefinitionError",
    "DuplicateRelationshipError",
]


def compile_view(request: ViewRequest, options: ViewOptions | None = None) -> CompiledView:
    """Compile a view request.

    Args:
        request: Tables, relationships, selected fields and target namespace.
        options: Optional layout options; defaults to ``ViewOptions()``.

    Returns:
        ``CompiledView`` whose ``sql`` is the ``CREATE OR REPLACE VIEW``
        statement.
    """
    return ViewBuilder(options=options).build(request)


def compile_view_json(request_json: str, options: ViewOptions | None = None) -> CompiledView:
    """Parse a JSON view request and compile it::

        compiled = semlayer.compile_view_json(body)
        return compiled.to_response()   # {"sqlQuery": "CREATE OR REPLACE VIEW ..."}

    Args:
        request_json: Raw JSON with ``viewName``, ``tables``,
            ``relationships``, ``selectedFields`` and ``namespace`` (or
            ``projectId``).
        options: Optional layout options.

    Returns:
        The compiled view.

    Raises:
        ParseError: If ``request_json`` is not valid JSON or not a valid
            view request.
    """
    try:
        raw = json.loads(request_json)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON: {exc}", raw=request_json) from exc

    try:
        request = ViewRequest.model_validate(raw)
    except PydanticValidationError as exc:
        raise ParseError(f"View request structure is invalid: {exc}", raw=request_json) from exc

    return compile_view(request, options)


def generate_view_sql(
    view_name: str,
    tables: list[TableInfo],
    relationships: list[Relationship],
    selected_fields: dict[str, list[str]],
    namespace: str,
    options: ViewOptions | None = None,
) -> str:
    """Compile plain arguments to the view statement string.

    Example::

        sql = generate_view_sql(
            "orders_enriched",
            tables=[orders, users],
            relationships=[orders_users],
            selected_fields={"p.d.orders": ["id"], "p.d.users": ["email"]},
            namespace="my-project",
        )
    """
    request = ViewRequest(
        view_name=view_name,
        tables=tables,
        relationships=relationships,
        selected_fields=selected_fields,
        namespace=namespace,
    )
    return compile_view(request, options).sql
