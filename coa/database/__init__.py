from .accounts import load_accounts, load_store, save_account, save_accounts
from .connection import connect, get_db
from .schema import init_db

__all__ = [
    "connect",
    "get_db",
    "init_db",
    "load_accounts",
    "load_store",
    "save_account",
    "save_accounts",
]
