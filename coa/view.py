#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Presentation-facing catalog view.

Keeps the last fetched snapshot, its forest and the flattened rows together.
Data changes rebuild all three from one fetch; expansion changes only
re-flatten the forest already held.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Union

from coa.expansion import ExpansionState
from coa.flatten import flatten
from coa.hierarchy import Forest, build
from coa.models import Account, Row
from coa.store import AccountChange, CatalogFilters, CatalogStore


logger = logging.getLogger(__name__)


Fetcher = Callable[[CatalogFilters], List[Account]]
AccountRef = Union[Account, str]


def _code(ref: AccountRef) -> str:
    return ref.code if isinstance(ref, Account) else ref


class CatalogView:
    def __init__(
        self,
        store: CatalogStore,
        filters: Optional[CatalogFilters] = None,
        fetch: Optional[Fetcher] = None,
        expansion: Optional[ExpansionState] = None,
    ):
        self.store = store
        self.filters = filters or CatalogFilters()
        self.expansion = expansion or ExpansionState()
        self.selected: Optional[Account] = None
        self._fetch: Fetcher = fetch or store.query
        self._snapshot: List[Account] = []
        self._forest: Forest = []
        self._rows: List[Row] = []
        self.refresh()

    @property
    def snapshot(self) -> List[Account]:
        return list(self._snapshot)

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def rows(self) -> List[Row]:
        return list(self._rows)

    def refresh(self, filters: Optional[CatalogFilters] = None) -> List[Row]:
        """Fetch, rebuild and re-flatten; fetch errors propagate unchanged."""
        if filters is not None:
            self.filters = filters
        snapshot = list(self._fetch(self.filters))
        forest = build(snapshot)
        rows = flatten(forest, self.expansion)
        self._snapshot, self._forest, self._rows = snapshot, forest, rows
        if self.selected is not None:
            self.selected = next(
                (a for a in snapshot if a.code == self.selected.code), None
            )
        logger.debug("view rebuilt: %d accounts, %d rows", len(snapshot), len(rows))
        return self.rows

    def _reflatten(self) -> List[Row]:
        self._rows = flatten(self._forest, self.expansion)
        return self.rows

    def on_toggle_expand(self, code: str) -> List[Row]:
        self.expansion.toggle(code)
        return self._reflatten()

    def on_expand_all(self) -> List[Row]:
        self.expansion.expand_all(account.code for account in self._snapshot)
        return self._reflatten()

    def on_collapse_all(self) -> List[Row]:
        self.expansion.collapse_all()
        return self._reflatten()

    def on_select(self, account: AccountRef) -> Account:
        self.selected = self.store.get(_code(account))
        return self.selected

    def on_edit(self, account: AccountRef, patch: Mapping[str, Any]) -> AccountChange:
        change = self.store.update(_code(account), patch)
        self.refresh()
        return change

    def on_deactivate(self, account: AccountRef) -> Account:
        updated = self.store.deactivate(_code(account))
        self.refresh()
        return updated

    def on_toggle_accepts_movement(self, account: AccountRef) -> Account:
        updated = self.store.toggle_accepts_movement(_code(account))
        self.refresh()
        return updated
