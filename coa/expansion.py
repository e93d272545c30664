#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Expanded-code set for tree display."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Optional, Set


class ExpansionState:
    """Set of codes currently expanded.

    Holds plain code strings only; toggling never touches account data.
    """

    def __init__(self, codes: Optional[Iterable[str]] = None):
        self._codes: Set[str] = set(codes or ())

    def contains(self, code: str) -> bool:
        return code in self._codes

    __contains__ = contains

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._codes))

    def __len__(self) -> int:
        return len(self._codes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpansionState):
            return NotImplemented
        return self._codes == other._codes

    def __repr__(self) -> str:
        return f"ExpansionState({sorted(self._codes)!r})"

    def toggle(self, code: str) -> bool:
        """Flip ``code`` and return whether it is now expanded."""
        if code in self._codes:
            self._codes.remove(code)
            return False
        self._codes.add(code)
        return True

    def expand(self, code: str) -> None:
        self._codes.add(code)

    def collapse(self, code: str) -> None:
        self._codes.discard(code)

    def expand_all(self, all_codes: Iterable[str]) -> None:
        self._codes = set(all_codes)

    def collapse_all(self) -> None:
        self._codes.clear()

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._codes)
