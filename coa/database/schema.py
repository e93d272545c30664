#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Database schema for the account catalog."""

from __future__ import annotations

import sqlite3


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
  scope TEXT NOT NULL DEFAULT 'default',
  code TEXT NOT NULL,
  description TEXT NOT NULL,
  level INTEGER NOT NULL,
  account_class INTEGER NOT NULL,
  parent_code TEXT,
  is_leaf INTEGER NOT NULL DEFAULT 0,
  accepts_movement INTEGER NOT NULL DEFAULT 0,
  nature TEXT NOT NULL DEFAULT 'DEBIT',
  currency TEXT NOT NULL DEFAULT 'LOCAL',
  active INTEGER NOT NULL DEFAULT 1,
  created_at TEXT DEFAULT CURRENT_TIMESTAMP,
  updated_at TEXT,
  PRIMARY KEY (scope, code)
);

CREATE INDEX IF NOT EXISTS idx_accounts_scope ON accounts(scope);
CREATE INDEX IF NOT EXISTS idx_accounts_class ON accounts(scope, account_class);
CREATE INDEX IF NOT EXISTS idx_accounts_level ON accounts(scope, level);
"""


def init_db(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA_SQL)
