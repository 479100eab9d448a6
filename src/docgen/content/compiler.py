"""Document compiler: one markdown source in, one Document out.

Steps for a source file:
    1. Derive its URL identity from the path (rejects misplaced files early)
    2. Parse front matter into body + attributes
    3. Split the body on the configured separator into content and example
    4. Render both sections, and the title attribute when present
    5. Assemble a frozen Document

Any failure propagates; a partial Document is never returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from docgen._errors import ParseError
from docgen.content.frontmatter import parse_front_matter
from docgen.content.renderer import strip_paragraph_wrapper

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from docgen.content.paths import PathMapper


@dataclass(frozen=True, slots=True)
class Document:
    """One compiled source file.

    Attributes:
        full_path: URL path including the language segment.
        canonical_path: URL path without the language segment; the key of
            the document within its language.
        language: Language tag.
        attributes: Front-matter attributes.
        content: Rendered HTML of the content section.
        example: Rendered HTML of the example section.
        title: Rendered inline title, or None when no ``title`` attribute.
        source: Source file the document was compiled from. Not serialized.

    """

    full_path: str
    canonical_path: str
    language: str
    attributes: dict[str, Any] = field(default_factory=dict)
    content: str = ""
    example: str = ""
    title: str | None = None
    source: Path | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form written to every JSON artifact."""
        data: dict[str, Any] = {
            "fullPath": self.full_path,
            "path": self.canonical_path,
            "attributes": self.attributes,
            "content": self.content,
            "example": self.example,
        }
        if self.title is not None:
            data["title"] = self.title
        return data


class DocumentCompiler:
    """Compiles markdown sources into Documents.

    Args:
        mapper: Path mapper for URL identity.
        render: Markdown-to-HTML callable.
        split_string: Separator between content and example sections.

    """

    def __init__(
        self,
        mapper: PathMapper,
        render: Callable[[str], str],
        split_string: str,
    ) -> None:
        self._mapper = mapper
        self._render = render
        self._split_string = split_string

    @property
    def mapper(self) -> PathMapper:
        return self._mapper

    def compile(self, source: Path) -> Document:
        """Read and compile ``source``.

        Raises:
            ParseError: If the file cannot be read or decoded, or its front
                matter is malformed.
            PathDerivationError: If the file is not under a language directory.

        """
        self._mapper.locate(source)
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"cannot read {source}: {exc}"
            raise ParseError(msg) from exc
        return self.compile_text(source, text)

    def compile_text(self, source: Path, text: str) -> Document:
        """Compile already-read source ``text`` as if it lived at ``source``."""
        location = self._mapper.locate(source)
        front = parse_front_matter(text)

        # First separator only; any later separator stays inside the example.
        content_src, _, example_src = front.body.partition(self._split_string)

        title = None
        if front.attributes.get("title") is not None:
            title = strip_paragraph_wrapper(self._render(str(front.attributes["title"])))

        return Document(
            full_path=location.full_path,
            canonical_path=location.canonical_path,
            language=location.language,
            attributes=front.attributes,
            content=self._render(content_src),
            example=self._render(example_src),
            title=title,
            source=source,
        )
