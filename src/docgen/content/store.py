"""Content store: every compiled Document, per language.

Maps ``language -> (canonical_path -> Document)``.  Created empty for each
configured language, updated as documents compile or disappear, never
persisted itself.  The derived artifacts are computed from its snapshots.

Upserting an existing key replaces the Document in place, so it keeps its
original insertion position (which breaks ties when ordering).

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Snapshots are
    copies, so readers never observe a mapping mid-update.

"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from docgen._types import CanonicalPath, Language
    from docgen.content.compiler import Document


class ContentStore:
    """In-memory multi-language document map.

    Args:
        languages: Languages to initialize with an empty mapping.

    """

    __slots__ = ("_contents", "_lock")

    def __init__(self, languages: Iterable[str]) -> None:
        self._contents: dict[Language, dict[CanonicalPath, Document]] = {
            lang: {} for lang in languages
        }
        self._lock = threading.Lock()

    @property
    def languages(self) -> tuple[Language, ...]:
        with self._lock:
            return tuple(self._contents)

    def upsert(self, language: Language, canonical_path: CanonicalPath, document: Document) -> None:
        """Insert or replace the document at ``(language, canonical_path)``."""
        with self._lock:
            self._contents.setdefault(language, {})[canonical_path] = document

    def remove(self, language: Language, canonical_path: CanonicalPath) -> Document | None:
        """Delete the entry if present and return it; absent keys are a no-op."""
        with self._lock:
            return self._contents.get(language, {}).pop(canonical_path, None)

    def get(self, language: Language, canonical_path: CanonicalPath) -> Document | None:
        with self._lock:
            return self._contents.get(language, {}).get(canonical_path)

    def snapshot(self, language: Language) -> Mapping[CanonicalPath, Document]:
        """Read-only copy of one language's mapping, in insertion order."""
        with self._lock:
            return MappingProxyType(dict(self._contents.get(language, {})))

    def __contains__(self, key: object) -> bool:
        """Support ``(language, canonical_path) in store``."""
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        language, canonical_path = key
        with self._lock:
            return canonical_path in self._contents.get(language, {})

    def __len__(self) -> int:
        with self._lock:
            return sum(len(docs) for docs in self._contents.values())
