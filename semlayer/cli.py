"""semlayer command-line interface.

Usage
-----
Compile a view request to SQL::

    semlayer compile request.json

Write the statement to a file, creating views in another dataset::

    semlayer compile request.json -o view.sql --view-dataset analytics_views

Print the join-proposal prompt for a list of tables::

    semlayer prompt tables.json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from semlayer import compile_view_json
from semlayer.config import ViewOptions
from semlayer.errors import SemLayerError
from semlayer.prompt.builder import JoinPromptBuilder
from semlayer.schema.snapshot import TableInfo

logger = logging.getLogger("semlayer.cli")

_TABLE_LIST = TypeAdapter(list[TableInfo])


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    verbose_help = "Log base-table choice, skipped relationships and dropped columns."
    # Subcommands accept -v too; SUPPRESS keeps them from resetting a leading -v.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
        help=verbose_help,
    )

    p = argparse.ArgumentParser(
        prog="semlayer",
        description="Compile semantic view definitions to BigQuery SQL.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument("--verbose", "-v", action="store_true", help=verbose_help)
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("compile", parents=[common], help="Compile a view request JSON file.")
    c.add_argument("request", type=Path, help="Path to the view request JSON.")
    c.add_argument(
        "--output", "-o", type=Path,
        help="Write the statement here instead of stdout.",
    )
    c.add_argument(
        "--view-dataset", metavar="NAME",
        help="Dataset views are created in (default: $SEMLAYER_VIEW_DATASET "
        "or 'semantic_views').",
    )

    pr = sub.add_parser(
        "prompt", parents=[common],
        help="Print the join-proposal prompt for a table list.",
    )
    pr.add_argument("tables", type=Path, help="Path to a JSON array of tables.")
    return p.parse_args(argv)


def _compile(args: argparse.Namespace) -> int:
    options = ViewOptions.from_env()
    if args.view_dataset:
        options = replace(options, view_dataset=args.view_dataset)

    compiled = compile_view_json(args.request.read_text(), options)
    if compiled.unreached_tables:
        logger.info(
            "Tables not reachable from %s: %s",
            compiled.base_table,
            ", ".join(compiled.unreached_tables),
        )

    if args.output:
        args.output.write_text(compiled.sql + "\n")
        logger.info("Wrote %s to %s", compiled.view_id, args.output)
    else:
        print(compiled.sql)
    return 0


def _prompt(args: argparse.Namespace) -> int:
    try:
        tables = _TABLE_LIST.validate_json(args.tables.read_text())
    except PydanticValidationError as exc:
        print(f"Invalid table list: {exc}", file=sys.stderr)
        return 1
    components = JoinPromptBuilder(tables).build()
    print(components.system_prompt)
    print(components.user_prompt, end="")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "compile":
            return _compile(args)
        return _prompt(args)
    except OSError as exc:
        print(f"Cannot read input: {exc}", file=sys.stderr)
        return 1
    except SemLayerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
