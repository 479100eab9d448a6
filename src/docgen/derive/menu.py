"""Menu tree: ordered documents grouped into sections and categories.

One left-to-right pass over the ordered documents:

- The first document, and every document with a truthy ``startpage``
  attribute, opens a new section with an empty ``children`` list.
- Any other document becomes a child of the most recent section.
- Sections are grouped by their ``category`` attribute, categories in the
  order they are first seen.

Menu entries never carry rendered bodies: ``content`` and ``example`` are
dropped from every entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docgen._errors import MenuError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docgen.content.compiler import Document

_BODY_FIELDS = ("content", "example")


def menu_entry(document: Document) -> dict[str, Any]:
    """Public fields of ``document`` as a menu entry."""
    entry = document.to_dict()
    for key in _BODY_FIELDS:
        entry.pop(key, None)
    return entry


def build_menu(ordered: Iterable[Document]) -> list[dict[str, Any]]:
    """Group ``ordered`` into ``[{"category": ..., "items": [...]}, ...]``.

    Raises:
        MenuError: If a section root has no ``category`` attribute.

    """
    current: dict[str, Any] | None = None
    categories: dict[str, list[dict[str, Any]]] = {}

    for document in ordered:
        entry = menu_entry(document)

        if current is not None and not document.attributes.get("startpage"):
            current["children"].append(entry)
            continue

        if "category" not in document.attributes:
            msg = f"{document.full_path} starts a menu section but has no category"
            raise MenuError(msg)

        entry["children"] = []
        current = entry
        categories.setdefault(document.attributes["category"], []).append(entry)

    return [{"category": category, "items": items} for category, items in categories.items()]
