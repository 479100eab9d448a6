"""Content layer: markdown sources as compiled, addressable documents.

Handles path mapping, front matter, markdown rendering, compilation,
the per-language content store, and file watching.
"""

from docgen.content.compiler import Document, DocumentCompiler
from docgen.content.frontmatter import FrontMatter, parse_front_matter
from docgen.content.paths import DocumentLocation, PathMapper, iter_source_files
from docgen.content.store import ContentStore
from docgen.content.watcher import ChangeEvent, ContentWatcher

__all__ = [
    "ChangeEvent",
    "ContentStore",
    "ContentWatcher",
    "Document",
    "DocumentCompiler",
    "DocumentLocation",
    "FrontMatter",
    "PathMapper",
    "iter_source_files",
    "parse_front_matter",
]
