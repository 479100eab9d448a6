"""docgen CLI: docgen build / docgen watch.

Entry point for the ``docgen`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the docgen CLI."""
    parser = argparse.ArgumentParser(
        prog="docgen",
        description="Generate per-language JSON content from markdown sources.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # docgen build
    build_parser = subparsers.add_parser(
        "build",
        help="Generate all artifacts once",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")

    # docgen watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Generate all artifacts, then regenerate on source changes",
    )
    watch_parser.add_argument("root", nargs="?", default=".", help="Project root directory")

    for sub in (build_parser, watch_parser):
        sub.add_argument(
            "--language",
            dest="languages",
            action="append",
            help="Language to generate (repeatable; overrides the config file)",
        )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from docgen import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from docgen._errors import ConfigError
    from docgen.app import build, watch

    try:
        if args.command == "build":
            result = build(root=args.root, languages=args.languages)
            if result.failures or result.errors:
                sys.exit(1)
        elif args.command == "watch":
            watch(root=args.root, languages=args.languages)
    except ConfigError as exc:
        print(f"  Config error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
