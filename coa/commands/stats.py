#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""coa stats command."""

from __future__ import annotations

from coa.database import get_db, load_store
from coa.utils import print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("stats", help="Catalog statistics", parents=parents)
    parser.set_defaults(func=run)
    return parser


def run(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
    print_json(store.statistics())
