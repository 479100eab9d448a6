"""Tests for docgen._cli: argument parsing and command dispatch."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from docgen._cli import _build_parser, main
from docgen._errors import ConfigError


class TestBuildParser:
    """_build_parser: CLI argument parsing."""

    def test_build_default_args(self) -> None:
        args = _build_parser().parse_args(["build"])
        assert args.command == "build"
        assert args.root == "."
        assert args.languages is None

    def test_build_with_custom_root(self) -> None:
        args = _build_parser().parse_args(["build", "my-project/"])
        assert args.root == "my-project/"

    def test_repeatable_language(self) -> None:
        args = _build_parser().parse_args(["watch", "--language", "en", "--language", "de"])
        assert args.command == "watch"
        assert args.languages == ["en", "de"]

    def test_no_command(self) -> None:
        args = _build_parser().parse_args([])
        assert args.command is None

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "docgen 0.1.0" in capsys.readouterr().out


class TestMain:
    """main: dispatch and exit codes."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: docgen" in capsys.readouterr().out

    def test_build_dispatch(self) -> None:
        result = MagicMock(failures=(), errors=0)
        with patch("docgen.app.build", return_value=result) as build:
            main(["build", "site", "--language", "de"])
        build.assert_called_once_with(root="site", languages=["de"])

    def test_build_failures_exit_nonzero(self) -> None:
        result = MagicMock(failures=(Path("/x/en/a.md"),), errors=0)
        with (
            patch("docgen.app.build", return_value=result),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["build"])
        assert exc_info.value.code == 1

    def test_build_errors_exit_nonzero(self) -> None:
        result = MagicMock(failures=(), errors=2)
        with (
            patch("docgen.app.build", return_value=result),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["build"])
        assert exc_info.value.code == 1

    def test_watch_dispatch(self) -> None:
        with patch("docgen.app.watch") as watch:
            main(["watch"])
        watch.assert_called_once_with(root=".", languages=None)

    def test_config_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with (
            patch("docgen.app.build", side_effect=ConfigError("Content directory not found")),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["build"])
        assert exc_info.value.code == 2
        assert "Config error: Content directory not found" in capsys.readouterr().err
