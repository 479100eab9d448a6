"""Tests for docgen.content.compiler: Document assembly."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docgen._errors import ParseError, PathDerivationError
from docgen.content.compiler import Document, DocumentCompiler
from docgen.content.paths import PathMapper
from tests.conftest import fake_render

SPLIT = "<!-- example -->"


@pytest.fixture
def mapper(tmp_path: Path) -> PathMapper:
    return PathMapper(
        base_dir=tmp_path / "src",
        docgen_dir=tmp_path / "docgen",
        origin_content_dir=tmp_path / "src" / "content",
        languages=("en",),
    )


@pytest.fixture
def compiler(mapper: PathMapper) -> DocumentCompiler:
    return DocumentCompiler(mapper, fake_render, SPLIT)


def _source(mapper: PathMapper, relative: str) -> Path:
    return mapper.origin_content_dir / relative


class TestDocument:
    """Document: frozen record with a JSON-ready dict form."""

    def test_frozen(self) -> None:
        doc = Document(full_path="/en/a", canonical_path="/a", language="en")
        with pytest.raises(AttributeError):
            doc.content = "x"  # type: ignore[misc]

    def test_to_dict_without_title(self) -> None:
        doc = Document(
            full_path="/en/a",
            canonical_path="/a",
            language="en",
            attributes={"position": 1},
            content="<p>c</p>",
            example="<p>e</p>",
            source=Path("/src/content/en/a.md"),
        )
        assert doc.to_dict() == {
            "fullPath": "/en/a",
            "path": "/a",
            "attributes": {"position": 1},
            "content": "<p>c</p>",
            "example": "<p>e</p>",
        }

    def test_to_dict_with_title(self) -> None:
        doc = Document(full_path="/en/a", canonical_path="/a", language="en", title="T")
        assert doc.to_dict()["title"] == "T"

    def test_source_ignored_in_equality(self) -> None:
        a = Document(full_path="/en/a", canonical_path="/a", language="en", source=Path("/x"))
        b = Document(full_path="/en/a", canonical_path="/a", language="en", source=Path("/y"))
        assert a == b


class TestCompileText:
    """compile_text: front matter, split, render, assemble."""

    def test_full_document(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        text = f"---\ntitle: Hello\nposition: 2\n---\nContent part\n{SPLIT}\nExample part\n"
        doc = compiler.compile_text(_source(mapper, "en/guide/intro.md"), text)

        assert doc.full_path == "/en/guide/intro"
        assert doc.canonical_path == "/guide/intro"
        assert doc.language == "en"
        assert doc.attributes == {"title": "Hello", "position": 2}
        assert doc.content == "<p>Content part</p>\n"
        assert doc.example == "<p>Example part</p>\n"
        assert doc.title == "Hello"

    def test_missing_example(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        doc = compiler.compile_text(_source(mapper, "en/a.md"), "---\nposition: 1\n---\nOnly\n")
        assert doc.content == "<p>Only</p>\n"
        assert doc.example == ""

    def test_empty_content(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        doc = compiler.compile_text(_source(mapper, "en/a.md"), f"{SPLIT}\nExample\n")
        assert doc.content == ""
        assert doc.example == "<p>Example</p>\n"

    def test_split_at_first_separator_only(
        self, compiler: DocumentCompiler, mapper: PathMapper
    ) -> None:
        doc = compiler.compile_text(_source(mapper, "en/a.md"), f"A\n{SPLIT}\nB\n{SPLIT}\nC\n")
        assert doc.content == "<p>A</p>\n"
        assert SPLIT in doc.example

    def test_no_title_attribute(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        doc = compiler.compile_text(_source(mapper, "en/a.md"), "---\nposition: 1\n---\nBody\n")
        assert doc.title is None
        assert "title" not in doc.to_dict()

    def test_title_rendered_inline(self, mapper: PathMapper) -> None:
        render = MagicMock(side_effect=lambda text: f"<p><strong>{text.strip()}</strong></p>\n")
        compiler = DocumentCompiler(mapper, render, SPLIT)
        doc = compiler.compile_text(_source(mapper, "en/a.md"), "---\ntitle: Bold\n---\n")
        assert doc.title == "<strong>Bold</strong>"
        assert doc.attributes["title"] == "Bold"

    def test_non_string_title(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        doc = compiler.compile_text(_source(mapper, "en/a.md"), "---\ntitle: 2024\n---\n")
        assert doc.title == "2024"

    def test_source_recorded(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        source = _source(mapper, "en/a.md")
        assert compiler.compile_text(source, "Body").source == source

    def test_malformed_front_matter_propagates(
        self, compiler: DocumentCompiler, mapper: PathMapper
    ) -> None:
        with pytest.raises(ParseError):
            compiler.compile_text(_source(mapper, "en/a.md"), "---\ntitle: [x\n---\n")

    def test_render_failure_propagates(self, mapper: PathMapper) -> None:
        render = MagicMock(side_effect=RuntimeError("renderer exploded"))
        compiler = DocumentCompiler(mapper, render, SPLIT)
        with pytest.raises(RuntimeError, match="renderer exploded"):
            compiler.compile_text(_source(mapper, "en/a.md"), "Body")


class TestCompile:
    """compile: reads the file, rejects bad paths before reading."""

    def test_reads_file(self, compiler: DocumentCompiler, mapper: PathMapper) -> None:
        source = _source(mapper, "en/a.md")
        source.parent.mkdir(parents=True)
        source.write_text("---\nposition: 1\n---\nHello\n", encoding="utf-8")

        doc = compiler.compile(source)
        assert doc.content == "<p>Hello</p>\n"
        assert doc.attributes == {"position": 1}

    def test_missing_file_is_parse_error(
        self, compiler: DocumentCompiler, mapper: PathMapper
    ) -> None:
        with pytest.raises(ParseError, match="cannot read"):
            compiler.compile(_source(mapper, "en/missing.md"))

    def test_undecodable_file_is_parse_error(
        self, compiler: DocumentCompiler, mapper: PathMapper
    ) -> None:
        source = _source(mapper, "en/bad.md")
        source.parent.mkdir(parents=True)
        source.write_bytes(b"\xff\xfe\xfa not utf-8")
        with pytest.raises(ParseError):
            compiler.compile(source)

    def test_path_checked_before_reading(self, mapper: PathMapper) -> None:
        render = MagicMock()
        compiler = DocumentCompiler(mapper, render, SPLIT)
        source = mapper.origin_content_dir / "top-level.md"
        source.parent.mkdir(parents=True)
        source.write_text("Body")

        with pytest.raises(PathDerivationError):
            compiler.compile(source)
        render.assert_not_called()
