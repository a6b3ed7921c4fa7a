"""Custom exception hierarchy for semlayer.

All public errors inherit from SemLayerError so callers can catch the base
class for any semlayer-specific failure.  The view compiler itself never
raises for well-formed input; these errors belong to the package boundaries
(JSON parsing, model answers, workspace editing).
"""
from __future__ import annotations


class SemLayerError(Exception):
    """Base exception for all semlayer errors."""


class ParseError(SemLayerError):
    """Raised when input cannot be parsed as a valid view request.

    Args:
        message: Human-readable description.
        raw: The raw string that failed to parse.
    """

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class ProposalParseError(ParseError):
    """Raised when a join-proposal model answer is not valid proposal JSON."""


class DefinitionError(SemLayerError):
    """Raised when a view definition is edited or resolved incorrectly.

    Args:
        message: Human-readable description.
        table_ids: Table ids involved in the failure, if any.
    """

    def __init__(self, message: str, table_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.table_ids = table_ids or []


class DuplicateRelationshipError(DefinitionError):
    """Raised when a relationship with the same id already exists."""

    def __init__(self, relationship_id: str) -> None:
        super().__init__(f"Relationship '{relationship_id}' already exists.")
        self.relationship_id = relationship_id


class ConfigError(SemLayerError):
    """Raised when an environment setting cannot be turned into an option.

    Args:
        message: Human-readable description.
        variable: Name of the offending environment variable.
    """

    def __init__(self, message: str, variable: str) -> None:
        super().__init__(message)
        self.variable = variable
