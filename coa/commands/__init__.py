from .init import add_parser as add_init_parser
from .account import add_parser as add_account_parser
from .tree import add_parser as add_tree_parser
from .stats import add_parser as add_stats_parser
from .imports import add_parser as add_import_parser
from .export import add_parser as add_export_parser
from .export import add_template_parser

__all__ = [
    "add_init_parser",
    "add_account_parser",
    "add_tree_parser",
    "add_stats_parser",
    "add_import_parser",
    "add_export_parser",
    "add_template_parser",
]
