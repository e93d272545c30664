#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main CLI for the chart-of-accounts catalog."""

from __future__ import annotations

import argparse
import logging
import sys

from coa import commands
from coa.utils import CatalogError, handle_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coa",
        description="Chart-of-accounts catalog CLI",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log to stderr (-vv for debug)"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--db-path", default="./coa.db", help="SQLite database path")
    common.add_argument("--scope", default="default", help="Catalog scope (company id)")

    subparsers = parser.add_subparsers(dest="command")

    commands.add_init_parser(subparsers, [common])
    commands.add_account_parser(subparsers, [common])
    commands.add_tree_parser(subparsers, [common])
    commands.add_stats_parser(subparsers, [common])
    commands.add_import_parser(subparsers, [common])
    commands.add_export_parser(subparsers, [common])
    commands.add_template_parser(subparsers, [common])

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main():
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except CatalogError as exc:
        handle_error(exc)


if __name__ == "__main__":
    main()
