#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""SQLite access for catalog scopes.

One ``get_db`` block is one transaction: a CLI command loads a scope into a
``CatalogStore``, mutates it and saves the touched records before the block
commits. Any exception leaves the file as it was.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from coa.database.schema import init_db


logger = logging.getLogger(__name__)


DEFAULT_DB_PATH = "./coa.db"
BUSY_TIMEOUT = 10.0


def connect(db_path: Union[str, Path] = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open ``db_path`` with the accounts schema in place.

    Missing parent directories are created, so ``--db-path data/empresa.db``
    works on a fresh checkout.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), timeout=BUSY_TIMEOUT)
    conn.row_factory = sqlite3.Row
    init_db(conn)
    return conn


@contextmanager
def get_db(db_path: Union[str, Path] = DEFAULT_DB_PATH) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
    except Exception:
        logger.debug("rolling back %s", db_path)
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        conn.close()
