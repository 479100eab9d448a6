"""Shared test fixtures for docgen."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from docgen.config import DocgenConfig
from docgen.content.compiler import Document


def write_source(root: Path, relative: str, attributes: str, body: str = "Body\n") -> Path:
    """Write a markdown source with front matter below ``root``."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{attributes}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal two-language project for testing.

    Layout::

        src/content/en/intro.md          position 1, guide, startpage
        src/content/en/guide/setup.md    position 2, guide
        src/content/en/api/index.md      position 0, api, startpage
        src/content/de/intro.md          position 1, guide, startpage

    """
    content = tmp_path / "src" / "content"
    write_source(
        content,
        "en/intro.md",
        "title: Introduction\nposition: 1\ncategory: guide\nstartpage: true",
        "# Intro\n\nWelcome.\n<!-- example -->\nExample text.\n",
    )
    write_source(content, "en/guide/setup.md", "title: Setup\nposition: 2\ncategory: guide")
    write_source(
        content, "en/api/index.md", "title: API\nposition: 0\ncategory: api\nstartpage: true"
    )
    write_source(
        content, "de/intro.md", "title: Einführung\nposition: 1\ncategory: guide\nstartpage: true"
    )
    return tmp_path


@pytest.fixture
def config(tmp_project: Path) -> DocgenConfig:
    """DocgenConfig for ``tmp_project`` with English and German enabled."""
    return DocgenConfig(root=tmp_project, languages=("en", "de"))


def fake_render(text: str) -> str:
    """Deterministic stand-in for the markdown renderer."""
    stripped = text.strip()
    return f"<p>{stripped}</p>\n" if stripped else ""


def make_document(
    canonical_path: str,
    *,
    language: str = "en",
    content: str = "<p>Body</p>\n",
    **attributes: Any,
) -> Document:
    """Create a Document without going through the compiler."""
    return Document(
        full_path=f"/{language}{canonical_path}",
        canonical_path=canonical_path,
        language=language,
        attributes=attributes,
        content=content,
        example="",
        title=attributes.get("title"),
    )
