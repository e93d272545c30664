#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Authoritative in-memory account collection for one catalog scope."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from coa.codes import class_name, code_sort_key, is_leaf_eligible, level_name
from coa.hierarchy import Forest, build
from coa.models import Account
from coa.utils import NotFoundError, PolicyError, ValidationError
from coa.validation import ValidationIssue, validate


logger = logging.getLogger(__name__)


ACCOUNT_FIELDS = (
    "code",
    "description",
    "explicit_parent_code",
    "is_leaf",
    "accepts_movement",
    "nature",
    "currency",
    "active",
)


@dataclass
class CatalogFilters:
    active_only: bool = False
    account_class: Optional[int] = None
    level: Optional[int] = None
    search: Optional[str] = None

    def matches(self, account: Account) -> bool:
        if self.active_only and not account.active:
            return False
        if self.account_class is not None and account.account_class != self.account_class:
            return False
        if self.level is not None and account.level != self.level:
            return False
        text = (self.search or "").strip()
        if text:
            if not (
                account.code.startswith(text)
                or text.lower() in account.description.lower()
            ):
                return False
        return True


@dataclass
class AccountChange:
    """Result of a successful add/update: the stored record plus non-blocking warnings."""

    account: Account
    warnings: List[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account": self.account.to_dict(),
            "warnings": [issue.to_dict() for issue in self.warnings],
        }


def account_from_data(data: Mapping[str, Any]) -> Account:
    """Build an Account from a validated account-shaped mapping.

    ``level`` and ``account_class`` are ignored; they are derived from ``code``.
    """
    kwargs = {name: data[name] for name in ACCOUNT_FIELDS if data.get(name) is not None}
    kwargs["explicit_parent_code"] = data.get("explicit_parent_code") or None
    kwargs["description"] = str(kwargs.get("description", "")).strip()
    for flag in ("is_leaf", "accepts_movement", "active"):
        if flag in kwargs:
            kwargs[flag] = bool(kwargs[flag])
    return Account(**kwargs)


class CatalogStore:
    """Flat account collection with validated mutations.

    Mutations are serialized by a lock so that validation and the write it
    guards happen as one step. Records handed out are copies; change them
    through ``update``.
    """

    def __init__(self, accounts: Iterable[Account] = (), scope: str = "default"):
        self.scope = scope
        self._accounts: Dict[str, Account] = {}
        self._lock = threading.RLock()
        self.load(accounts)

    def load(self, accounts: Iterable[Account]) -> None:
        """Replace the collection with already-persisted records."""
        with self._lock:
            self._accounts = {account.code: account.copy() for account in accounts}
        logger.debug("catalog %s loaded with %d accounts", self.scope, len(self._accounts))

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, code: object) -> bool:
        return code in self._accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self.snapshot())

    def codes(self) -> List[str]:
        return sorted(self._accounts, key=code_sort_key)

    def find(self, code: str) -> Optional[Account]:
        account = self._accounts.get(code)
        return account.copy() if account else None

    def get(self, code: str) -> Account:
        account = self.find(code)
        if account is None:
            raise NotFoundError(code)
        return account

    def snapshot(self) -> List[Account]:
        """Copies of every record, ordered by code."""
        with self._lock:
            return [self._accounts[code].copy() for code in self.codes()]

    # mutations

    def add(self, candidate: Union[Account, Mapping[str, Any]]) -> AccountChange:
        data = candidate.to_dict() if isinstance(candidate, Account) else dict(candidate)
        data.setdefault("description", "")
        if data.get("active") is not None and not data["active"]:
            raise PolicyError(
                "New accounts start active; add the account, then deactivate it",
                {"code": data.get("code")},
            )
        with self._lock:
            result = validate(data, self._accounts)
            if not result.ok:
                logger.info("rejected account %r: %s", data.get("code"), result.error_codes)
                raise ValidationError(result.errors, data.get("code"))
            account = account_from_data(data)
            self._accounts[account.code] = account
        self._log_warnings(account.code, result.warnings)
        logger.info("account added: %s %s", account.code, account.description)
        return AccountChange(account.copy(), result.warnings)

    def update(self, code: str, patch: Mapping[str, Any]) -> AccountChange:
        with self._lock:
            current = self._accounts.get(code)
            if current is None:
                raise NotFoundError(code)
            if "code" in patch and patch["code"] != code:
                raise PolicyError(
                    "Account code cannot be changed",
                    {"code": code, "requested": patch["code"]},
                )
            if "active" in patch and bool(patch["active"]) != current.active:
                raise PolicyError(
                    "Use deactivate to change whether an account is active",
                    {"code": code},
                )

            merged = current.to_dict()
            merged.update(patch)
            result = validate(merged, self._accounts, updating_code=code)
            if not result.ok:
                logger.info("rejected update of %s: %s", code, result.error_codes)
                raise ValidationError(result.errors, code)

            account = account_from_data(merged)
            self._accounts[code] = account
        self._log_warnings(code, result.warnings)
        logger.info("account updated: %s", code)
        return AccountChange(account.copy(), result.warnings)

    def deactivate(self, code: str) -> Account:
        """Soft delete: the record and its descendants stay in the hierarchy."""
        with self._lock:
            account = self._accounts.get(code)
            if account is None:
                raise NotFoundError(code)
            if account.active:
                account.active = False
                logger.info("account deactivated: %s", code)
            return account.copy()

    def toggle_accepts_movement(self, code: str) -> Account:
        with self._lock:
            account = self._accounts.get(code)
            if account is None:
                raise NotFoundError(code)
            if not is_leaf_eligible(code):
                raise PolicyError(
                    f"Only level 4+ accounts can toggle movements: {code}",
                    {"code": code, "level": account.level},
                )
            if not account.active:
                raise PolicyError(
                    f"Inactive accounts cannot toggle movements: {code}",
                    {"code": code},
                )
            account.accepts_movement = not account.accepts_movement
            logger.info(
                "account %s accepts_movement=%s", code, account.accepts_movement
            )
            return account.copy()

    def _log_warnings(self, code: str, warnings: List[ValidationIssue]) -> None:
        for issue in warnings:
            logger.warning("account %s: %s", code, issue.message)

    # queries

    def query(self, filters: Optional[CatalogFilters] = None) -> List[Account]:
        filters = filters or CatalogFilters()
        return [account for account in self.snapshot() if filters.matches(account)]

    def search(self, text: str, active_only: bool = True, limit: int = 50) -> List[Account]:
        if not text or not text.strip():
            return []
        found = self.query(CatalogFilters(active_only=active_only, search=text))
        return found[:limit]

    def leaf_accounts(self) -> List[Account]:
        """Active accounts that can carry postings."""
        return [
            account
            for account in self.query(CatalogFilters(active_only=True))
            if account.is_leaf and account.accepts_movement
        ]

    def is_code_available(self, code: str) -> bool:
        """True when ``code`` is well formed and not taken, inactive records included."""
        return validate({"code": code}, self._accounts).ok

    def forest(self, filters: Optional[CatalogFilters] = None) -> Forest:
        return build(self.query(filters))

    def statistics(self) -> Dict[str, Any]:
        accounts = self.snapshot()
        total = len(accounts)
        active = sum(1 for account in accounts if account.active)

        by_class: Dict[int, int] = {}
        by_level: Dict[int, int] = {}
        for account in accounts:
            by_class[account.account_class] = by_class.get(account.account_class, 0) + 1
            by_level[account.level] = by_level.get(account.level, 0) + 1

        return {
            "total_accounts": total,
            "active_accounts": active,
            "inactive_accounts": total - active,
            "active_ratio": round(active / total, 4) if total else 0.0,
            "by_class": [
                {
                    "account_class": cls,
                    "description": class_name(cls),
                    "total_accounts": by_class[cls],
                }
                for cls in sorted(by_class)
            ],
            "by_level": [
                {
                    "level": level,
                    "name": level_name(level),
                    "total_accounts": by_level[level],
                }
                for level in sorted(by_level)
            ],
        }
