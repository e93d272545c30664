"""Chart-of-accounts hierarchy engine."""

from coa.codes import class_of, is_leaf_eligible, level_of
from coa.expansion import ExpansionState
from coa.flatten import flatten
from coa.hierarchy import build
from coa.models import Account, AccountNode, AccountState, Currency, Nature, Row
from coa.store import AccountChange, CatalogFilters, CatalogStore
from coa.utils import (
    CatalogError,
    MalformedCodeError,
    NotFoundError,
    PolicyError,
    ValidationError,
)
from coa.validation import IssueCode, Severity, ValidationIssue, ValidationResult, validate
from coa.view import CatalogView

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountChange",
    "AccountNode",
    "AccountState",
    "CatalogError",
    "CatalogFilters",
    "CatalogStore",
    "CatalogView",
    "Currency",
    "ExpansionState",
    "IssueCode",
    "MalformedCodeError",
    "Nature",
    "NotFoundError",
    "PolicyError",
    "Row",
    "Severity",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "build",
    "class_of",
    "flatten",
    "is_leaf_eligible",
    "level_of",
    "validate",
]
