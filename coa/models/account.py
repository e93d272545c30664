#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Account model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict

from coa.codes import class_of, is_leaf_eligible, level_of


class Nature(str, Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    @classmethod
    def parse(cls, value: Any) -> "Nature":
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        return cls(NATURE_ALIASES.get(text, text))


class Currency(str, Enum):
    LOCAL = "LOCAL"
    FOREIGN = "FOREIGN"

    @classmethod
    def parse(cls, value: Any) -> "Currency":
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        return cls(CURRENCY_ALIASES.get(text, text))


NATURE_ALIASES = {
    "DEUDORA": "DEBIT",
    "ACREEDORA": "CREDIT",
    "D": "DEBIT",
    "C": "CREDIT",
}


CURRENCY_ALIASES = {
    "MN": "LOCAL",
    "ME": "FOREIGN",
}


class AccountState(str, Enum):
    ACTIVE_POSTABLE = "ACTIVE_POSTABLE"
    ACTIVE_NONPOSTABLE = "ACTIVE_NONPOSTABLE"
    INACTIVE = "INACTIVE"


@dataclass
class Account:
    code: str
    description: str
    explicit_parent_code: str | None = None
    is_leaf: bool | None = None
    accepts_movement: bool | None = None
    nature: Nature = Nature.DEBIT
    currency: Currency = Currency.LOCAL
    active: bool = True
    level: int = field(init=False)
    account_class: int = field(init=False)

    def __post_init__(self) -> None:
        self.level = level_of(self.code)
        self.account_class = class_of(self.code)
        # Unset leaf flags follow the level policy.
        if self.is_leaf is None:
            self.is_leaf = is_leaf_eligible(self.code)
        if self.accepts_movement is None:
            self.accepts_movement = self.is_leaf
        self.nature = Nature.parse(self.nature)
        self.currency = Currency.parse(self.currency)

    @property
    def state(self) -> AccountState:
        if not self.active:
            return AccountState.INACTIVE
        if self.accepts_movement:
            return AccountState.ACTIVE_POSTABLE
        return AccountState.ACTIVE_NONPOSTABLE

    def copy(self, **changes: Any) -> "Account":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "description": self.description,
            "level": self.level,
            "account_class": self.account_class,
            "explicit_parent_code": self.explicit_parent_code,
            "is_leaf": self.is_leaf,
            "accepts_movement": self.accepts_movement,
            "nature": self.nature.value,
            "currency": self.currency.value,
            "active": self.active,
        }
