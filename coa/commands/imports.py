#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""coa import command."""

from __future__ import annotations

from coa.database import get_db, load_store, save_accounts
from coa.io import import_file, validate_file
from coa.utils import print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser(
        "import", help="Import accounts from .txt, .csv, .xlsx or .json", parents=parents
    )
    parser.add_argument("file", help="File to import")
    parser.add_argument(
        "--validate-only", action="store_true", help="Report problems without importing"
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
        if args.validate_only:
            print_json(validate_file(args.file, store))
            return
        result = import_file(args.file, store)
        imported = [store.get(code) for code in result["codes"]]
        save_accounts(conn, imported, args.scope)
    print_json(result)
