"""Tests for docgen._errors."""

from docgen._errors import (
    ArtifactWriteError,
    ConfigError,
    ContentError,
    DocgenError,
    ExportError,
    MenuError,
    ParseError,
    PathDerivationError,
)


class TestErrorHierarchy:
    """All docgen errors inherit from DocgenError."""

    def test_docgen_error_is_exception(self) -> None:
        assert issubclass(DocgenError, Exception)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, DocgenError)

    def test_content_errors_inherit(self) -> None:
        assert issubclass(ContentError, DocgenError)
        assert issubclass(ParseError, ContentError)
        assert issubclass(PathDerivationError, ContentError)

    def test_menu_error_inherits(self) -> None:
        assert issubclass(MenuError, DocgenError)

    def test_export_errors_inherit(self) -> None:
        assert issubclass(ExportError, DocgenError)
        assert issubclass(ArtifactWriteError, ExportError)

    def test_parse_and_path_errors_distinct(self) -> None:
        assert not issubclass(ParseError, PathDerivationError)
        assert not issubclass(PathDerivationError, ParseError)

    def test_catch_all_docgen_errors(self) -> None:
        """All specific errors are catchable via DocgenError."""
        for error_cls in (
            ConfigError,
            ParseError,
            PathDerivationError,
            MenuError,
            ArtifactWriteError,
        ):
            try:
                raise error_cls("test")
            except DocgenError:
                pass
