"""Compilation options.

``ViewOptions`` controls the parts of the generated statement that are
deployment conventions rather than view content: the dataset views are
created in, the SELECT list indent, and the placeholder column used when
nothing is selected.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from semlayer.errors import ConfigError

DEFAULT_VIEW_DATASET = "semantic_views"
DEFAULT_INDENT = "    "
PLACEHOLDER_COLUMN = "no_fields_selected"


@dataclass(frozen=True)
class ViewOptions:
    """Options for one compiler instance.

    Attributes:
        view_dataset: Dataset (sub-namespace) the view is created in.
        indent: Prefix for each SELECT list line and the FROM source.
        placeholder_column: Column name emitted as ``1 as <name>`` when no
            selected field survives.
    """

    view_dataset: str = DEFAULT_VIEW_DATASET
    indent: str = DEFAULT_INDENT
    placeholder_column: str = PLACEHOLDER_COLUMN

    @classmethod
    def from_env(cls) -> ViewOptions:
        """Build options from ``SEMLAYER_VIEW_DATASET`` and ``SEMLAYER_INDENT``.

        ``SEMLAYER_INDENT`` is a non-negative number of spaces.

        Raises:
            ConfigError: If ``SEMLAYER_INDENT`` is not a non-negative integer.
        """
        view_dataset = os.getenv("SEMLAYER_VIEW_DATASET", DEFAULT_VIEW_DATASET)
        indent_raw = os.getenv("SEMLAYER_INDENT")
        indent = _parse_indent(indent_raw) if indent_raw else DEFAULT_INDENT
        return cls(view_dataset=view_dataset or DEFAULT_VIEW_DATASET, indent=indent)


def _parse_indent(raw: str) -> str:
    try:
        width = int(raw)
    except ValueError as exc:
        raise ConfigError(
            f"SEMLAYER_INDENT must be a number of spaces, got {raw!r}.",
            variable="SEMLAYER_INDENT",
        ) from exc
    if width < 0:
        raise ConfigError(
            f"SEMLAYER_INDENT must not be negative, got {width}.",
            variable="SEMLAYER_INDENT",
        )
    return " " * width
