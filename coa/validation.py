#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Candidate account validation.

Every check runs and every problem is collected, so callers can show all
of them at once. Blocking problems land in ``errors``; leaf/movement policy
disagreements and parent-hint problems land in ``warnings`` and never block
persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from coa.codes import (
    MAX_CODE_LENGTH,
    MIN_CODE_LENGTH,
    is_leaf_eligible,
    is_numeric_code,
    level_of,
)
from coa.models.account import Account, Currency, Nature


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueCode(str, Enum):
    MALFORMED_CODE = "MALFORMED_CODE"
    INVALID_CODE_LENGTH = "INVALID_CODE_LENGTH"
    LEVEL_MISMATCH = "LEVEL_MISMATCH"
    CLASS_MISMATCH = "CLASS_MISMATCH"
    INVALID_CLASS_DIGIT = "INVALID_CLASS_DIGIT"
    DUPLICATE_CODE = "DUPLICATE_CODE"
    EMPTY_DESCRIPTION = "EMPTY_DESCRIPTION"
    INVALID_NATURE = "INVALID_NATURE"
    INVALID_CURRENCY = "INVALID_CURRENCY"
    LEAF_POLICY_MISMATCH = "LEAF_POLICY_MISMATCH"
    MOVEMENT_MISMATCH = "MOVEMENT_MISMATCH"
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"
    PARENT_NOT_PREFIX = "PARENT_NOT_PREFIX"


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    code: IssueCode
    message: str
    severity: Severity = Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "code": self.code.value,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def error_codes(self) -> List[IssueCode]:
        return [issue.code for issue in self.errors]

    @property
    def warning_codes(self) -> List[IssueCode]:
        return [issue.code for issue in self.warnings]

    def add(self, issue: ValidationIssue) -> None:
        if issue.severity == Severity.ERROR:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }


Catalog = Union[Mapping[str, Account], Iterable[Union[Account, str]]]


def _catalog_codes(catalog: Optional[Catalog]) -> set:
    if catalog is None:
        return set()
    if isinstance(catalog, Mapping):
        return set(catalog.keys())
    return {item if isinstance(item, str) else item.code for item in catalog}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _candidate_dict(candidate: Union[Account, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(candidate, Account):
        return candidate.to_dict()
    return dict(candidate)


def validate(
    candidate: Union[Account, Mapping[str, Any]],
    catalog: Optional[Catalog] = None,
    updating_code: Optional[str] = None,
) -> ValidationResult:
    """Validate ``candidate`` against code-derived facts and ``catalog``.

    Args:
        candidate: account-shaped mapping (or an ``Account``)
        catalog: existing accounts, active or not: a code mapping, or an
            iterable of accounts or codes
        updating_code: code of the record being updated; it does not count
            as a duplicate of itself

    Returns:
        ValidationResult with ordered errors and warnings
    """
    data = _candidate_dict(candidate)
    result = ValidationResult()
    code = data.get("code")
    code_ok = is_numeric_code(code)

    # 1. format
    if not code_ok:
        result.add(
            ValidationIssue(
                "code",
                IssueCode.MALFORMED_CODE,
                f"Code must contain digits only: {code!r}",
            )
        )

    # 2. length
    if isinstance(code, str) and code:
        if not MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH:
            result.add(
                ValidationIssue(
                    "code",
                    IssueCode.INVALID_CODE_LENGTH,
                    f"Code length must be between {MIN_CODE_LENGTH} and "
                    f"{MAX_CODE_LENGTH}, got {len(code)}",
                )
            )

    # 3. level, 4. class: only derivable from a well-formed code
    if code_ok and data.get("level") is not None:
        expected_level = level_of(code)
        if _as_int(data["level"]) != expected_level:
            result.add(
                ValidationIssue(
                    "level",
                    IssueCode.LEVEL_MISMATCH,
                    f"Level {data['level']!r} does not match code {code} "
                    f"(expected {expected_level})",
                )
            )

    if code_ok and data.get("account_class") is not None:
        expected_class = int(code[0])
        if _as_int(data["account_class"]) != expected_class:
            result.add(
                ValidationIssue(
                    "account_class",
                    IssueCode.CLASS_MISMATCH,
                    f"Class {data['account_class']!r} does not match code {code} "
                    f"(expected {expected_class})",
                )
            )

    if code_ok and code[0] == "0":
        result.add(
            ValidationIssue(
                "code",
                IssueCode.INVALID_CLASS_DIGIT,
                f"Code must start with an account class digit 1-9: {code}",
            )
        )

    # 5. uniqueness, inactive records included
    codes = _catalog_codes(catalog)
    if isinstance(code, str) and code in codes and code != updating_code:
        result.add(
            ValidationIssue(
                "code",
                IssueCode.DUPLICATE_CODE,
                f"Code already exists in the catalog: {code}",
            )
        )

    if "description" in data:
        description = data.get("description")
        if not isinstance(description, str) or not description.strip():
            result.add(
                ValidationIssue(
                    "description",
                    IssueCode.EMPTY_DESCRIPTION,
                    "Description is required",
                )
            )

    if data.get("nature") is not None:
        try:
            Nature.parse(data["nature"])
        except ValueError:
            result.add(
                ValidationIssue(
                    "nature",
                    IssueCode.INVALID_NATURE,
                    f"Unknown nature: {data['nature']!r}",
                )
            )

    if data.get("currency") is not None:
        try:
            Currency.parse(data["currency"])
        except ValueError:
            result.add(
                ValidationIssue(
                    "currency",
                    IssueCode.INVALID_CURRENCY,
                    f"Unknown currency: {data['currency']!r}",
                )
            )

    # 6. leaf/movement agreement
    if code_ok:
        eligible = is_leaf_eligible(code)
        is_leaf = data.get("is_leaf")
        if is_leaf is None:
            is_leaf = eligible
        elif bool(is_leaf) != eligible:
            result.add(
                ValidationIssue(
                    "is_leaf",
                    IssueCode.LEAF_POLICY_MISMATCH,
                    f"Level {level_of(code)} accounts are "
                    f"{'' if eligible else 'not '}expected to be leaves",
                    Severity.WARNING,
                )
            )
        accepts_movement = data.get("accepts_movement")
        if accepts_movement is not None and bool(accepts_movement) != bool(is_leaf):
            result.add(
                ValidationIssue(
                    "accepts_movement",
                    IssueCode.MOVEMENT_MISMATCH,
                    "Leaf accounts normally accept movements and parent accounts do not",
                    Severity.WARNING,
                )
            )

    parent = data.get("explicit_parent_code")
    if parent:
        if parent not in codes:
            result.add(
                ValidationIssue(
                    "explicit_parent_code",
                    IssueCode.PARENT_NOT_FOUND,
                    f"Parent account not found: {parent}",
                    Severity.WARNING,
                )
            )
        elif isinstance(code, str) and not (len(parent) < len(code) and code.startswith(parent)):
            result.add(
                ValidationIssue(
                    "explicit_parent_code",
                    IssueCode.PARENT_NOT_PREFIX,
                    f"Parent {parent} is not a prefix of {code}; the code prefix decides placement",
                    Severity.WARNING,
                )
            )

    return result
