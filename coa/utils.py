#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared errors and JSON helpers for the catalog engine and CLI."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO


@dataclass
class CatalogError(Exception):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": True,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class MalformedCodeError(CatalogError):
    def __init__(self, code_value: Any):
        super().__init__(
            "MALFORMED_CODE",
            f"Account code must be a non-empty string of digits: {code_value!r}",
            {"code": code_value},
        )


class NotFoundError(CatalogError):
    def __init__(self, code_value: str):
        super().__init__(
            "ACCOUNT_NOT_FOUND",
            f"Account not found: {code_value}",
            {"code": code_value},
        )


class PolicyError(CatalogError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("POLICY_VIOLATION", message, details)


class ValidationError(CatalogError):
    """Raised by store mutations once the validator has collected every issue."""

    def __init__(self, issues: List[Any], code_value: Optional[str] = None):
        self.issues = list(issues)
        details: Dict[str, Any] = {"issues": [issue.to_dict() for issue in self.issues]}
        if code_value is not None:
            details["code"] = code_value
        summary = "; ".join(issue.message for issue in self.issues)
        super().__init__("VALIDATION_FAILED", f"Validation failed: {summary}", details)

    @property
    def issue_codes(self) -> List[str]:
        return [issue.code.value for issue in self.issues]


def load_json_input(stream: Optional[TextIO] = None) -> Dict[str, Any]:
    """Read one account-shaped JSON object (stdin by default)."""
    text = (stream or sys.stdin).read()
    if not text.strip():
        raise CatalogError("INVALID_JSON", "Expected a JSON object on stdin, got nothing")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(
            "INVALID_JSON", f"Invalid JSON input: {exc}", {"line": exc.lineno}
        ) from exc
    if not isinstance(data, dict):
        raise CatalogError(
            "INVALID_JSON", f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


def _json_default(value: Any) -> Any:
    # enums and paths reach the CLI output through to_dict() payloads
    if isinstance(value, Enum):
        return value.value
    return str(value)


def print_json(data: Any, stream: Optional[TextIO] = None) -> None:
    print(
        json.dumps(data, ensure_ascii=False, indent=2, default=_json_default),
        file=stream or sys.stdout,
    )


def handle_error(err: CatalogError, exit_code: int = 1) -> None:
    """Print ``err`` as JSON on stdout and exit; callers parse stdout only."""
    print_json(err.to_dict())
    sys.exit(exit_code)
