"""Startup banner: mode-aware status output.

Prints a short status block with document counts, timing and output
location.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docgen.config import DocgenConfig
    from docgen.reactive.pipeline import GenerateResult


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "watch": (_GREEN, "watch"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def print_banner(config: DocgenConfig, result: GenerateResult, mode: str) -> None:
    """Print the docgen status banner to stderr.

    Args:
        config: Resolved DocgenConfig.
        result: Outcome of the initial full generation.
        mode: ``"build"`` or ``"watch"``.

    """
    from docgen import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}docgen{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    docs_label = "document" if result.documents == 1 else "documents"
    timing = f" {_DIM}in {result.duration_ms:.0f}ms{_RESET}" if result.duration_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {result.documents} {docs_label} generated{timing}")
    lines.append(f"  {_DIM}├─{_RESET} languages: {', '.join(config.languages)}")
    lines.append(f"  {_DIM}├─{_RESET} content: {_DIM}{config.content_path}{_RESET}")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{result.output_dir}{_RESET}")

    if result.failures:
        lines.append("")
        skipped = "source" if len(result.failures) == 1 else "sources"
        lines.append(f"  {_YELLOW}!{_RESET} {len(result.failures)} {skipped} skipped")

    if result.errors:
        if not result.failures:
            lines.append("")
        errors = "error" if result.errors == 1 else "errors"
        lines.append(f"  {_YELLOW}!{_RESET} {result.errors} {errors} reported")

    if mode == "watch":
        lines.append("")
        lines.append(f"  {_CYAN}Watching for changes...{_RESET}")

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
