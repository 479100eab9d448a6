"""Path mapping: where a source lives, where it goes, and what it is called.

Every markdown source sits at ``<origin_content_dir>/<lang>/<path>.md``.
From that location alone the mapper derives:

- the output path (the source re-rooted from ``base_dir`` onto ``docgen_dir``
  with a ``.json`` suffix),
- the full URL path (``/<lang>/<path>``),
- the language tag (``<lang>``),
- the canonical path (``/<path>``), the key of the document in its
  language's content map.

All three URL values come from one split of the relative path, so
``"/" + language + canonical_path == full_path`` holds for every file the
mapper accepts.  Removal relies on this: a deleted file's store key is
recovered from its path without reading it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from docgen._errors import PathDerivationError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docgen.config import DocgenConfig

SOURCE_SUFFIX = ".md"
OUTPUT_SUFFIX = ".json"

# Output trees keep the source's ``content/`` directory; it is not part of the URL.
_CONTENT_SEGMENT = "content"


@dataclass(frozen=True, slots=True)
class DocumentLocation:
    """URL identity of a document.

    Attributes:
        full_path: URL path including the language segment (``/en/guide/intro``).
        canonical_path: URL path without it (``/guide/intro``).
        language: Language tag (``en``).

    """

    full_path: str
    canonical_path: str
    language: str


@dataclass(frozen=True, slots=True)
class PathMapper:
    """Derives output paths and URL identity from source file paths.

    Stateless apart from the configured roots, which must be absolute.

    Args:
        base_dir: Source root mirrored into ``docgen_dir`` for outputs.
        docgen_dir: Output root.
        origin_content_dir: Root of the ``<lang>/...`` source tree.
        languages: Accepted language tags. Empty accepts any.

    """

    base_dir: Path
    docgen_dir: Path
    origin_content_dir: Path
    languages: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: DocgenConfig) -> PathMapper:
        return cls(
            base_dir=config.base_path,
            docgen_dir=config.output_path,
            origin_content_dir=config.content_path,
            languages=config.languages,
        )

    def output_path(self, file: Path) -> Path:
        """Where the per-document JSON for ``file`` is written."""
        try:
            rel = file.relative_to(self.base_dir)
        except ValueError:
            msg = f"{file} is outside the source root {self.base_dir}"
            raise PathDerivationError(msg) from None
        out = self.docgen_dir / rel
        if out.suffix == SOURCE_SUFFIX:
            out = out.with_suffix(OUTPUT_SUFFIX)
        return out

    def relative_path(self, file: Path) -> str:
        """URL path of ``file`` including its language (the ``fullPath``)."""
        return "/" + "/".join(self._segments(file))

    def language(self, file: Path) -> str:
        """Language tag of ``file``.

        Raises:
            PathDerivationError: If the file sits directly under the content
                root, leaving no segment to take the language from.

        """
        return self.locate(file).language

    def canonical_path(self, file: Path) -> str:
        """URL path of ``file`` with its language segment removed."""
        return self.locate(file).canonical_path

    def locate(self, file: Path) -> DocumentLocation:
        """Derive the full URL identity of ``file`` in one step.

        Raises:
            PathDerivationError: If the file is outside both roots, has too
                few segments to carry a language, or its language is not
                one of the configured ones.

        """
        segments = self._segments(file)
        if len(segments) < 2:
            msg = f"{file} has no language directory below {self.origin_content_dir}"
            raise PathDerivationError(msg)

        language, *rest = segments
        if self.languages and language not in self.languages:
            msg = f"{file} belongs to unconfigured language {language!r}"
            raise PathDerivationError(msg)

        canonical = "/" + "/".join(rest)
        return DocumentLocation(
            full_path=f"/{language}{canonical}",
            canonical_path=canonical,
            language=language,
        )

    def locate_prefix(self, directory: Path) -> tuple[str, str]:
        """Language and canonical-path prefix shared by every document below ``directory``.

        A language directory yields the prefix ``"/"``.

        Raises:
            PathDerivationError: If ``directory`` is the content root itself,
                lies outside it, or names an unconfigured language.

        """
        segments = self._segments(directory)
        if not segments:
            msg = f"{directory} has no language directory below {self.origin_content_dir}"
            raise PathDerivationError(msg)

        language, *rest = segments
        if self.languages and language not in self.languages:
            msg = f"{directory} belongs to unconfigured language {language!r}"
            raise PathDerivationError(msg)
        return language, "/" + "".join(f"{segment}/" for segment in rest)

    def _segments(self, file: Path) -> list[str]:
        """Relative path segments of a source or output file, suffix stripped."""
        for root in (self.origin_content_dir, self.docgen_dir):
            try:
                rel = PurePosixPath(file.relative_to(root).as_posix())
            except ValueError:
                continue
            break
        else:
            msg = f"{file} is outside {self.origin_content_dir} and {self.docgen_dir}"
            raise PathDerivationError(msg)

        segments = list(rel.parts)
        if segments and segments[0] == _CONTENT_SEGMENT:
            segments = segments[1:]
        if segments:
            last = segments[-1]
            for suffix in (SOURCE_SUFFIX, OUTPUT_SUFFIX):
                if last.endswith(suffix):
                    segments[-1] = last.removesuffix(suffix)
                    break
        return segments


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield every file below ``root``, depth-first, entries sorted by name."""
    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            yield from iter_source_files(entry)
        elif entry.is_file():
            yield entry
