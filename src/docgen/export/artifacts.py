"""Artifact writer: persists documents and derived views as JSON.

Per language there are four artifact kinds:

    document    one compact file per source, at the mapped output path
    combined    compact ``canonical_path -> document`` map
    ordered     pretty-printed list of documents sorted by position
    menu        pretty-printed ``[{category, items}]`` tree

A failed write is retried once.  A second failure raises
``ArtifactWriteError``; the caller decides how far the failure reaches.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from docgen._errors import ArtifactWriteError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from docgen._types import ArtifactKind
    from docgen.content.compiler import Document
    from docgen.observability.collector import PipelineCollector

_COMPACT = {"separators": (",", ":")}
_PRETTY = {"indent": 2}


@dataclass(frozen=True, slots=True)
class WrittenArtifact:
    """Record of a single file written.

    Attributes:
        kind: Which artifact was written.
        language: Language the artifact belongs to.
        output_path: Absolute filesystem path to the written file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to serialize and write.

    """

    kind: ArtifactKind
    language: str
    output_path: Path
    size_bytes: int
    duration_ms: float


def dumps(data: Any, *, pretty: bool = False) -> str:
    """Serialize ``data``; values JSON cannot represent (YAML dates) become strings."""
    options = _PRETTY if pretty else _COMPACT
    return json.dumps(data, ensure_ascii=False, default=str, **options)


class ArtifactWriter:
    """Writes JSON artifacts, creating parent directories as needed.

    Args:
        collector: Receives an ``ArtifactWritten`` event per write.
        retries: Extra attempts after a failed write.

    """

    def __init__(self, collector: PipelineCollector | None = None, *, retries: int = 1) -> None:
        self._collector = collector
        self._retries = retries

    def write_document(self, document: Document, target: Path) -> WrittenArtifact:
        return self._write("document", document.language, target, dumps(document.to_dict()))

    def write_combined(
        self, language: str, mapping: Mapping[str, Document], target: Path
    ) -> WrittenArtifact:
        data = {path: doc.to_dict() for path, doc in mapping.items()}
        return self._write("combined", language, target, dumps(data))

    def write_ordered(
        self, language: str, ordered: Sequence[Document], target: Path
    ) -> WrittenArtifact:
        data = [doc.to_dict() for doc in ordered]
        return self._write("ordered", language, target, dumps(data, pretty=True))

    def write_menu(
        self, language: str, menu: Sequence[Mapping[str, Any]], target: Path
    ) -> WrittenArtifact:
        return self._write("menu", language, target, dumps(list(menu), pretty=True))

    def delete(self, target: Path) -> bool:
        """Remove an artifact. Returns False when it did not exist.

        Raises:
            ArtifactWriteError: If the file exists but cannot be removed.

        """
        for attempt in range(self._retries + 1):
            try:
                target.unlink()
            except FileNotFoundError:
                return False
            except OSError as exc:
                if attempt < self._retries:
                    continue
                msg = f"Cannot remove {target}: {exc}"
                raise ArtifactWriteError(msg) from exc
            return True
        return False

    def _write(
        self, kind: ArtifactKind, language: str, target: Path, payload: str
    ) -> WrittenArtifact:
        start = time.perf_counter()
        for attempt in range(self._retries + 1):
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(payload, encoding="utf-8")
            except OSError as exc:
                if attempt < self._retries:
                    continue
                msg = f"Cannot write {kind} artifact {target}: {exc}"
                raise ArtifactWriteError(msg) from exc
            break

        duration_ms = (time.perf_counter() - start) * 1000
        if self._collector is not None:
            self._collector.record_artifact(kind, language, str(target), duration_ms=duration_ms)
        return WrittenArtifact(
            kind=kind,
            language=language,
            output_path=target,
            size_bytes=len(payload.encode("utf-8")),
            duration_ms=duration_ms,
        )
