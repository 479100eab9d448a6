"""Markdown rendering with lazily loaded syntax highlighters.

Markdown is rendered by Patitas.  Fenced code blocks carrying a language
tag are highlighted by Pygments first and handed to Patitas as raw
``<pre>`` HTML blocks, which CommonMark passes through untouched up to the
closing ``</pre>``.

Pygments lexers are resolved per fence tag on first use and cached for the
life of the process in a ``HighlighterCache``.  A tag without a lexer is
cached as ``None`` and its block renders unhighlighted.

Thread Safety:
    Cache lookups and insertions are serialized by a ``threading.Lock``, so
    renders may run concurrently from worker threads.

"""

from __future__ import annotations

import re
import threading
from html import escape
from typing import TYPE_CHECKING

from patitas import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

if TYPE_CHECKING:
    from pygments.lexer import Lexer

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n"
    r"(?P<code>.*?)"
    r"^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


class HighlighterCache:
    """Process-wide cache of Pygments lexers keyed by fence tag.

    Lexers are immutable once loaded, so entries are never evicted.

    """

    __slots__ = ("_formatter", "_lexers", "_lock")

    def __init__(self) -> None:
        self._lexers: dict[str, Lexer | None] = {}
        self._lock = threading.Lock()
        self._formatter = HtmlFormatter(nowrap=True)

    def lexer_for(self, tag: str) -> Lexer | None:
        """Return the lexer for ``tag``, loading it on first request."""
        key = tag.lower()
        with self._lock:
            if key in self._lexers:
                return self._lexers[key]
            try:
                lexer: Lexer | None = get_lexer_by_name(key)
            except ClassNotFound:
                lexer = None
            self._lexers[key] = lexer
            return lexer

    def highlight(self, code: str, tag: str) -> str | None:
        """Highlight ``code`` as ``tag``; ``None`` when no lexer exists."""
        lexer = self.lexer_for(tag)
        if lexer is None:
            return None
        return highlight(code, lexer, self._formatter)

    def __contains__(self, tag: object) -> bool:
        if not isinstance(tag, str):
            return False
        with self._lock:
            return tag.lower() in self._lexers

    def __len__(self) -> int:
        with self._lock:
            return len(self._lexers)


# Shared by every renderer that does not bring its own cache.
DEFAULT_HIGHLIGHTER = HighlighterCache()


class MarkdownRenderer:
    """Render markdown text to HTML.

    Args:
        highlighter: Lexer cache for fenced code blocks. Defaults to the
            process-wide ``DEFAULT_HIGHLIGHTER``.

    """

    def __init__(self, highlighter: HighlighterCache | None = None) -> None:
        self._highlighter = highlighter if highlighter is not None else DEFAULT_HIGHLIGHTER
        self._md = Markdown(plugins=["table"])

    @property
    def highlighter(self) -> HighlighterCache:
        return self._highlighter

    def __call__(self, text: str) -> str:
        return self.render(text)

    def render(self, text: str) -> str:
        if not text.strip():
            return ""
        return self._md(self.highlight_code_blocks(text))

    def highlight_code_blocks(self, text: str) -> str:
        """Replace tagged fenced code blocks with highlighted ``<pre>`` HTML."""

        def _repl(match: re.Match[str]) -> str:
            tag = match.group("lang")
            if not tag:
                return match.group(0)
            highlighted = self._highlighter.highlight(match.group("code"), tag)
            if highlighted is None:
                return match.group(0)
            if not highlighted.endswith("\n"):
                highlighted += "\n"
            lang = escape(tag, quote=True)
            return f'<pre class="highlight" data-language="{lang}"><code>{highlighted}</code></pre>'

        return FENCED_BLOCK_PATTERN.sub(_repl, text)


def strip_paragraph_wrapper(html: str) -> str:
    """Remove a single leading ``<p>`` and trailing ``</p>`` from ``html``."""
    return html.strip().removeprefix("<p>").removesuffix("</p>")
