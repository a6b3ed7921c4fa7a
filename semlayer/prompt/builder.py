"""Prompt builder for join proposals.

The join-proposal model receives the schemas of the workspace tables and
answers with candidate relationships, each with a short reason.
``JoinPromptBuilder`` assembles the prompt; ``parse_join_proposals`` turns
the answer into :class:`~semlayer.schema.snapshot.JoinProposal` records.
The library does NOT call the model; callers pass their own ``generate``
function to :func:`propose_joins`.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from semlayer.errors import ProposalParseError
from semlayer.schema.snapshot import CARDINALITIES, JoinProposal, TableInfo

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT_TEMPLATE = """\
You are an expert data architect specializing in database design and \
identifying relationships between tables.

## Your role
Analyze the schemas of the tables below and propose logical joins between them.

Consider the following when making proposals:
- Exact matches in column names (e.g., 'customer_id' and 'customer_id').
- Common key naming conventions (e.g., 'id' in a 'customers' table and \
'customer_id' in an 'orders' table).
- Plural vs. singular table names (e.g., 'customers' table vs 'customer_id' field).
- The likely cardinality based on the nature of the data. For instance, a join \
from a 'users' table to an 'orders' table on 'user_id' is likely one-to-many.

For each proposal, provide the source and target tables and fields, the \
cardinality, and a brief reason for your suggestion. Only propose joins \
between different tables.  Refer to tables by their ID.

## Exact output format
JSON only, no markdown, no commentary:
{{"proposals": [{{"fromTable": "<table id>", "fromField": "<column>", \
"toTable": "<table id>", "toField": "<column>", "cardinality": "<cardinality>", \
"reason": "<why>"}}]}}

Allowed cardinality values: {cardinalities}

## Tables
{tables}
"""

_USER_PROMPT_TEMPLATE = """\
Propose joins between these {count} tables.
"""


@dataclass
class PromptComponents:
    """The prompt parts ready to pass to the join-proposal model.

    Attributes:
        system_prompt: Full instructions including the table listing.
        user_prompt: The request line.
        tables_json: The table listing as a JSON string (for logging or
            debugging).
    """

    system_prompt: str
    user_prompt: str
    tables_json: str


class JoinPromptBuilder:
    """Builds the join-proposal prompt for a set of tables.

    Args:
        tables: Workspace tables with their schemas.
    """

    def __init__(self, tables: list[TableInfo]) -> None:
        self._tables = tables

    def build(self) -> PromptComponents:
        tables_json = self._build_tables_summary()
        system_prompt = _SYSTEM_PROMPT_TEMPLATE.format(
            cardinalities=", ".join(CARDINALITIES),
            tables=self._format_tables(),
        )
        user_prompt = _USER_PROMPT_TEMPLATE.format(count=len(self._tables))
        return PromptComponents(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            tables_json=tables_json,
        )

    def _format_tables(self) -> str:
        blocks = []
        for table in self._tables:
            lines = [f"- Table Name: {table.name} (ID: {table.id})", "  Schema:"]
            lines.extend(f"  - {col.name} ({col.type})" for col in table.schema_)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def _build_tables_summary(self) -> str:
        summary = [
            {
                "id": table.id,
                "name": table.name,
                "schema": [
                    {"name": col.name, "type": col.type, "mode": col.mode or "NULLABLE"}
                    for col in table.schema_
                ],
            }
            for table in self._tables
        ]
        return json.dumps(summary, indent=2)


class _ProposalsEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    proposals: list[JoinProposal]


def parse_join_proposals(text: str, tables: list[TableInfo]) -> list[JoinProposal]:
    """Parse a model answer into join proposals.

    Proposals joining a table to itself, or naming a table id that is not in
    ``tables``, are dropped.

    Args:
        text: Raw model answer, ``{"proposals": [...]}``.
        tables: The tables the prompt was built from.

    Returns:
        The usable proposals, in answer order.

    Raises:
        ProposalParseError: If ``text`` is not valid JSON or not the expected
            shape.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProposalParseError(f"Invalid JSON: {exc}", raw=text) from exc

    try:
        envelope = _ProposalsEnvelope.model_validate(raw)
    except PydanticValidationError as exc:
        raise ProposalParseError(f"Proposal structure is invalid: {exc}", raw=text) from exc

    known = {t.id for t in tables}
    proposals = []
    for proposal in envelope.proposals:
        if proposal.from_table == proposal.to_table:
            logger.debug("Self-join proposal %s dropped", proposal.relationship_id)
        elif proposal.from_table not in known or proposal.to_table not in known:
            logger.debug("Proposal %s names an unknown table; dropped", proposal.relationship_id)
        else:
            proposals.append(proposal)
    return proposals


def propose_joins(
    tables: list[TableInfo],
    generate: Callable[[PromptComponents], str],
) -> list[JoinProposal]:
    """Ask the join-proposal model for candidate relationships.

    Args:
        tables: Workspace tables.  With fewer than two there is nothing to
            join and ``generate`` is not called.
        generate: Sends the prompt to the model and returns its raw answer.

    Returns:
        Parsed, filtered proposals.

    Raises:
        ProposalParseError: If the model answer cannot be parsed.
    """
    if len(tables) < 2:
        return []
    components = JoinPromptBuilder(tables).build()
    return parse_join_proposals(generate(components), tables)
