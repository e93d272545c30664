#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""coa export and template commands."""

from __future__ import annotations

from coa.commands.account import add_filter_arguments, filters_from_args
from coa.database import get_db, load_store
from coa.io import write_accounts, write_template
from coa.utils import print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser(
        "export", help="Export accounts to .txt, .csv, .xlsx or .json", parents=parents
    )
    parser.add_argument("file", help="Output file")
    add_filter_arguments(parser)
    parser.set_defaults(func=run)
    return parser


def add_template_parser(subparsers, parents):
    parser = subparsers.add_parser(
        "template", help="Write an import template", parents=parents
    )
    parser.add_argument("file", help="Output file (.txt, .csv, .xlsx or .json)")
    parser.set_defaults(func=run_template)
    return parser


def run(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
    exported = write_accounts(args.file, store.query(filters_from_args(args)))
    print_json({"status": "success", "file": args.file, "exported_count": exported})


def run_template(args):
    written = write_template(args.file)
    print_json({"status": "success", "file": args.file, "rows": written})
