"""Tests for docgen package exports and metadata."""

import docgen


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(docgen.__version__, str)
        assert "0.1.0" in docgen.__version__

    def test_all_exports_resolvable(self) -> None:
        for name in docgen.__all__:
            getattr(docgen, name)

    def test_entry_points_are_callable(self) -> None:
        assert callable(docgen.build)
        assert callable(docgen.watch)

    def test_invalid_attribute_raises(self) -> None:
        import pytest

        with pytest.raises(AttributeError, match="no attribute"):
            docgen.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
