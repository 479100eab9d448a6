"""docgen: incremental documentation content generator.

Compiles a tree of localized markdown sources into per-language JSON
artifacts and keeps them current as files change on disk.

Quick start::

    import docgen

    docgen.build("my-project/")      # One-shot full generation
    docgen.watch("my-project/")      # Generate, then follow file changes

Artifacts written per language:

    combined    canonical path -> document map
    ordered     documents sorted by ``position``
    menu        startpage sections grouped by ``category``

"""

__version__ = "0.1.0"
__all__ = [
    "DocgenConfig",
    "__version__",
    "build",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import docgen`` fast: patitas, pygments and watchfiles are only
    loaded once an entry point is actually used.
    """
    if name == "DocgenConfig":
        from docgen.config import DocgenConfig

        return DocgenConfig

    if name == "build":
        from docgen.app import build

        return build

    if name == "watch":
        from docgen.app import watch

        return watch

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
