"""Front matter: YAML attributes at the head of a markdown source.

Front matter is delimited by ``---`` on its own line at the start of the
file and closed by ``---`` or ``...``.  A file without an opening delimiter
has no attributes and its whole text is the body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from docgen._errors import ParseError

_OPEN = "---"
_CLOSE = frozenset({"---", "..."})


@dataclass(frozen=True, slots=True)
class FrontMatter:
    """A source split into its markdown body and its attributes."""

    body: str
    attributes: dict[str, Any] = field(default_factory=dict)


def parse_front_matter(text: str) -> FrontMatter:
    """Split ``text`` into body and front-matter attributes.

    Raises:
        ParseError: If the opening delimiter is never closed, the block is
            not valid YAML, or the YAML is not a mapping.

    """
    text = text.removeprefix("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _OPEN:
        return FrontMatter(body=text)

    for index in range(1, len(lines)):
        if lines[index].rstrip() in _CLOSE:
            break
    else:
        msg = "front matter opened with '---' but never closed"
        raise ParseError(msg)

    block = "".join(lines[1:index])
    body = "".join(lines[index + 1 :])

    try:
        attributes = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        msg = f"invalid front matter: {exc}"
        raise ParseError(msg) from exc

    if attributes is None:
        attributes = {}
    if not isinstance(attributes, dict):
        msg = f"front matter must be a mapping, got {type(attributes).__name__}"
        raise ParseError(msg)

    return FrontMatter(body=body, attributes=attributes)
