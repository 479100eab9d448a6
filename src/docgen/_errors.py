"""docgen error hierarchy.

All docgen-specific errors inherit from DocgenError for easy catching.
"""


class DocgenError(Exception):
    """Base error for all docgen operations."""


class ConfigError(DocgenError):
    """Invalid or missing configuration."""


class ContentError(DocgenError):
    """Error in content processing (reading, front matter, path derivation)."""


class ParseError(ContentError):
    """A source file could not be read or its front matter is malformed."""


class PathDerivationError(ContentError):
    """A source path does not fit the ``<content root>/<lang>/...`` layout."""


class MenuError(DocgenError):
    """The menu tree cannot be built from the ordered documents."""


class ExportError(DocgenError):
    """Error while persisting generated artifacts."""


class ArtifactWriteError(ExportError):
    """An artifact could not be written, even after a retry."""
