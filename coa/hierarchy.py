#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Forest construction from a flat account collection.

Parents are inferred from code prefixes only: the parent of "1011" is the
longest proper prefix ("101", "10", "1") present in the collection. Codes
with no present prefix become roots, so catalogs with gaps still build.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from coa.codes import code_sort_key, parent_candidates
from coa.models import Account, AccountNode


Forest = List[AccountNode]


def find_parent(code: str, index: Mapping[str, Any]) -> Optional[str]:
    """Return the longest proper prefix of ``code`` present in ``index``."""
    for prefix in parent_candidates(code):
        if prefix in index:
            return prefix
    return None


def _sort_nodes(nodes: List[AccountNode]) -> None:
    nodes.sort(key=lambda node: code_sort_key(node.code))
    for node in nodes:
        if node.children:
            _sort_nodes(node.children)


def build(records: Iterable[Account]) -> Forest:
    """Build an ordered forest from ``records``.

    Input order does not matter. When the same code appears more than once
    the last record wins; the store never lets that happen.
    """
    ordered = sorted(records, key=lambda account: code_sort_key(account.code))
    index: Dict[str, AccountNode] = {}
    for account in ordered:
        index[account.code] = AccountNode(account=account)

    roots: Forest = []
    for code, node in index.items():
        parent_code = find_parent(code, index)
        if parent_code is None:
            roots.append(node)
        else:
            index[parent_code].add_child(node)

    _sort_nodes(roots)
    return roots


def iter_nodes(forest: Iterable[AccountNode]) -> Iterator[AccountNode]:
    """Pre-order walk over every node regardless of expansion."""
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(forest: Iterable[AccountNode], code: str) -> Optional[AccountNode]:
    for node in iter_nodes(forest):
        if node.code == code:
            return node
    return None


def ancestors_of(forest: Iterable[AccountNode], code: str) -> List[str]:
    """Codes of the inferred ancestors of ``code``, root first."""

    def walk(nodes: Iterable[AccountNode], path: List[str]) -> Optional[List[str]]:
        for node in nodes:
            if node.code == code:
                return path
            if code.startswith(node.code):
                found = walk(node.children, path + [node.code])
                if found is not None:
                    return found
        return None

    return walk(forest, []) or []


def to_structure(forest: Iterable[AccountNode]) -> List[Dict[str, Any]]:
    """Nested plain-dict view of the forest."""
    return [
        {
            "code": node.code,
            "description": node.account.description,
            "level": node.account.level,
            "is_leaf": node.account.is_leaf,
            "active": node.account.active,
            "children": to_structure(node.children),
        }
        for node in forest
    ]
