from .account import Account, AccountState, Currency, Nature
from .tree import AccountNode, Row

__all__ = [
    "Account",
    "AccountNode",
    "AccountState",
    "Currency",
    "Nature",
    "Row",
]
