"""Positional ordering of a language's documents."""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from docgen.content.compiler import Document


def compare_positions(a: Document, b: Document) -> int:
    """Three-way comparison on ``attributes["position"]``.

    A document without a position compares equal to everything. Ordering
    such documents is unsupported: their placement is unspecified.
    """
    pa = a.attributes.get("position")
    pb = b.attributes.get("position")
    if pa is None or pb is None:
        return 0
    if pa < pb:
        return -1
    if pa > pb:
        return 1
    return 0


def order_documents(mapping: Mapping[str, Document]) -> list[Document]:
    """Documents of ``mapping`` sorted by position, ties in insertion order."""
    return sorted(mapping.values(), key=cmp_to_key(compare_positions))
