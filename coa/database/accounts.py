#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Account persistence."""

from __future__ import annotations

import sqlite3
from typing import Iterable, List

from coa.models import Account
from coa.store import CatalogStore


def _row_to_account(row: sqlite3.Row) -> Account:
    return Account(
        code=row["code"],
        description=row["description"],
        explicit_parent_code=row["parent_code"],
        is_leaf=bool(row["is_leaf"]),
        accepts_movement=bool(row["accepts_movement"]),
        nature=row["nature"],
        currency=row["currency"],
        active=bool(row["active"]),
    )


def load_accounts(conn: sqlite3.Connection, scope: str = "default") -> List[Account]:
    rows = conn.execute(
        "SELECT * FROM accounts WHERE scope = ? ORDER BY code", (scope,)
    ).fetchall()
    return [_row_to_account(row) for row in rows]


def save_account(conn: sqlite3.Connection, account: Account, scope: str = "default") -> None:
    conn.execute(
        """
        INSERT INTO accounts (
          scope, code, description, level, account_class, parent_code,
          is_leaf, accepts_movement, nature, currency, active
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(scope, code) DO UPDATE SET
          description = excluded.description,
          parent_code = excluded.parent_code,
          is_leaf = excluded.is_leaf,
          accepts_movement = excluded.accepts_movement,
          nature = excluded.nature,
          currency = excluded.currency,
          active = excluded.active,
          updated_at = CURRENT_TIMESTAMP
        """,
        (
            scope,
            account.code,
            account.description,
            account.level,
            account.account_class,
            account.explicit_parent_code,
            int(bool(account.is_leaf)),
            int(bool(account.accepts_movement)),
            account.nature.value,
            account.currency.value,
            int(account.active),
        ),
    )


def save_accounts(
    conn: sqlite3.Connection, accounts: Iterable[Account], scope: str = "default"
) -> int:
    saved = 0
    for account in accounts:
        save_account(conn, account, scope)
        saved += 1
    return saved


def load_store(conn: sqlite3.Connection, scope: str = "default") -> CatalogStore:
    return CatalogStore(load_accounts(conn, scope), scope=scope)
