#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Forest linearization for display."""

from __future__ import annotations

from typing import Iterable, List

from coa.expansion import ExpansionState
from coa.models import AccountNode, Row


def flatten(forest: Iterable[AccountNode], expansion: ExpansionState) -> List[Row]:
    """Pre-order rows of ``forest``; children appear only under expanded codes.

    Depth is ``level - 1`` rather than the position in the tree, so a code
    attached across a gap keeps the indentation of its own level.
    """
    rows: List[Row] = []

    def visit(nodes: Iterable[AccountNode]) -> None:
        for node in nodes:
            expanded = expansion.contains(node.code)
            rows.append(
                Row(
                    account=node.account,
                    depth=node.account.level - 1,
                    has_children=node.has_children,
                    expanded=expanded and node.has_children,
                )
            )
            if expanded:
                visit(node.children)

    visit(forest)
    return rows


def render_rows(rows: Iterable[Row], indent: str = "  ") -> str:
    """Plain-text tree, one row per line."""
    lines = []
    for row in rows:
        if row.has_children:
            marker = "-" if row.expanded else "+"
        else:
            marker = " "
        flags = []
        if not row.account.active:
            flags.append("inactive")
        if row.account.accepts_movement:
            flags.append("postable")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        lines.append(
            f"{indent * row.depth}{marker} {row.code}  {row.account.description}{suffix}"
        )
    return "\n".join(lines)
