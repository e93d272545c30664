#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""coa tree command."""

from __future__ import annotations

from coa.commands.account import add_filter_arguments, filters_from_args
from coa.database import get_db, load_store
from coa.expansion import ExpansionState
from coa.flatten import flatten, render_rows
from coa.hierarchy import build, to_structure
from coa.utils import print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("tree", help="Show the account hierarchy", parents=parents)
    add_filter_arguments(parser)
    parser.add_argument(
        "--expand", action="append", default=[], metavar="CODE", help="Expand this code"
    )
    parser.add_argument("--expand-all", action="store_true", help="Expand every account")
    parser.add_argument(
        "--format",
        choices=["json", "text", "nested"],
        default="json",
        help="json rows, indented text, or nested structure",
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
    accounts = store.query(filters_from_args(args))
    forest = build(accounts)

    expansion = ExpansionState(args.expand)
    if args.expand_all:
        expansion.expand_all(account.code for account in accounts)

    if args.format == "nested":
        print_json({"structure": to_structure(forest), "total_roots": len(forest)})
        return

    rows = flatten(forest, expansion)
    if args.format == "text":
        print(render_rows(rows))
        return
    print_json({"rows": [row.to_dict() for row in rows], "total_rows": len(rows)})
