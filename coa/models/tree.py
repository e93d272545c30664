#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Hierarchy node and display row models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from coa.models.account import Account


@dataclass
class AccountNode:
    account: Account
    children: List[AccountNode] = field(default_factory=list)

    @property
    def code(self) -> str:
        return self.account.code

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    def add_child(self, child: AccountNode) -> None:
        self.children.append(child)

    @property
    def descendant_count(self) -> int:
        count = len(self.children)
        for child in self.children:
            count += child.descendant_count
        return count


@dataclass(frozen=True)
class Row:
    """One render-ready line of the flattened catalog."""

    account: Account
    depth: int
    has_children: bool
    expanded: bool = False

    @property
    def code(self) -> str:
        return self.account.code

    def to_dict(self) -> Dict[str, Any]:
        payload = self.account.to_dict()
        payload["depth"] = self.depth
        payload["has_children"] = self.has_children
        payload["expanded"] = self.expanded
        return payload
