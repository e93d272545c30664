#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""coa init command."""

from __future__ import annotations

import json
from pathlib import Path

from coa.database import get_db, load_store, save_accounts
from coa.utils import CatalogError, print_json


STANDARD_ACCOUNTS = Path(__file__).resolve().parent.parent / "data" / "standard_accounts.json"


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("init", help="Create the catalog and load the seed accounts", parents=parents)
    parser.add_argument(
        "--accounts-file",
        default=str(STANDARD_ACCOUNTS),
        help="JSON list of seed accounts",
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    accounts_path = Path(args.accounts_file)
    if not accounts_path.exists():
        raise CatalogError("INVALID_FILE", f"Seed accounts file not found: {accounts_path}")
    seed = json.loads(accounts_path.read_text(encoding="utf-8"))

    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
        added = [store.add(data).account for data in seed if data.get("code") not in store]
        save_accounts(conn, added, args.scope)

    print_json(
        {
            "status": "success",
            "message": "Catalog initialized",
            "scope": args.scope,
            "accounts_loaded": len(added),
            "total_accounts": len(store),
        }
    )
