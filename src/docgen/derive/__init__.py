"""Derived views: artifacts computed from, not stored in, the content store."""

from docgen.derive.menu import build_menu, menu_entry
from docgen.derive.ordering import compare_positions, order_documents

__all__ = [
    "build_menu",
    "compare_positions",
    "menu_entry",
    "order_documents",
]
