#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""coa account command."""

from __future__ import annotations

from coa.database import get_db, load_store, save_account
from coa.store import CatalogFilters
from coa.utils import load_json_input, print_json


def add_filter_arguments(parser) -> None:
    parser.add_argument("--class", dest="account_class", type=int, help="Account class 1-9")
    parser.add_argument("--level", type=int, help="Account level (code length)")
    parser.add_argument("--search", help="Code prefix or description text")
    parser.add_argument(
        "--active-only", action="store_true", help="Hide deactivated accounts"
    )


def filters_from_args(args) -> CatalogFilters:
    return CatalogFilters(
        active_only=args.active_only,
        account_class=args.account_class,
        level=args.level,
        search=args.search,
    )


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("account", help="Manage accounts", parents=parents)
    sub = parser.add_subparsers(dest="account_cmd")

    list_parser = sub.add_parser("list", help="List accounts", parents=parents)
    add_filter_arguments(list_parser)
    list_parser.set_defaults(func=run_list)

    show_parser = sub.add_parser("show", help="Show one account", parents=parents)
    show_parser.add_argument("code", help="Account code")
    show_parser.set_defaults(func=run_show)

    add_parser = sub.add_parser("add", help="Add an account (JSON on stdin)", parents=parents)
    add_parser.set_defaults(func=run_add)

    update_parser = sub.add_parser(
        "update", help="Update an account (JSON patch on stdin)", parents=parents
    )
    update_parser.add_argument("code", help="Account code")
    update_parser.set_defaults(func=run_update)

    deactivate_parser = sub.add_parser(
        "deactivate", help="Deactivate an account", parents=parents
    )
    deactivate_parser.add_argument("code", help="Account code")
    deactivate_parser.set_defaults(func=run_deactivate)

    toggle_parser = sub.add_parser(
        "toggle-movement", help="Allow or block postings on a level 4+ account", parents=parents
    )
    toggle_parser.add_argument("code", help="Account code")
    toggle_parser.set_defaults(func=run_toggle_movement)

    check_parser = sub.add_parser(
        "check", help="Check whether a code is still available", parents=parents
    )
    check_parser.add_argument("code", help="Account code")
    check_parser.set_defaults(func=run_check)

    return parser


def run_list(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
    accounts = store.query(filters_from_args(args))
    print_json({"accounts": [account.to_dict() for account in accounts]})


def run_show(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
    print_json(store.get(args.code).to_dict())


def run_add(args):
    data = load_json_input()
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
        change = store.add(data)
        save_account(conn, change.account, args.scope)
    print_json({"status": "success", "message": "Account added", **change.to_dict()})


def run_update(args):
    patch = load_json_input()
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
        change = store.update(args.code, patch)
        save_account(conn, change.account, args.scope)
    print_json({"status": "success", "message": "Account updated", **change.to_dict()})


def run_deactivate(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
        account = store.deactivate(args.code)
        save_account(conn, account, args.scope)
    print_json(
        {"status": "success", "message": "Account deactivated", "account": account.to_dict()}
    )


def run_toggle_movement(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
        account = store.toggle_accepts_movement(args.code)
        save_account(conn, account, args.scope)
    print_json(
        {
            "status": "success",
            "message": "Movement flag updated",
            "account": account.to_dict(),
        }
    )


def run_check(args):
    with get_db(args.db_path) as conn:
        store = load_store(conn, args.scope)
    print_json({"code": args.code, "available": store.is_code_available(args.code)})
