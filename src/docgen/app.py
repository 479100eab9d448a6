"""docgen application entry points.

``build`` generates every artifact once.  ``watch`` does the same, then
keeps the artifacts current as sources change until interrupted.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from docgen.banner import print_banner
from docgen.config_loader import load_config
from docgen.observability import EventLog, PipelineCollector
from docgen.reactive.pipeline import DocgenPipeline

if TYPE_CHECKING:
    from docgen.reactive.pipeline import GenerateResult


def _create_pipeline(root: str | Path, overrides: dict[str, object]) -> DocgenPipeline:
    config = load_config(Path(root), **overrides)
    collector = PipelineCollector(EventLog())
    return DocgenPipeline(config, collector=collector)


def build(root: str | Path = ".", **kwargs: object) -> GenerateResult:
    """Generate every artifact once.

    Args:
        root: Path to the project root directory.
        **kwargs: Override DocgenConfig fields.

    Returns:
        The result of the full generation pass.

    """
    pipeline = _create_pipeline(root, kwargs)
    result = pipeline.generate_all()
    print_banner(pipeline.config, result, mode="build")
    return result


def watch(root: str | Path = ".", **kwargs: object) -> None:
    """Generate every artifact, then regenerate on every source change.

    Runs until interrupted (Ctrl+C).

    Args:
        root: Path to the project root directory.
        **kwargs: Override DocgenConfig fields.

    """
    from docgen.content.watcher import ContentWatcher

    pipeline = _create_pipeline(root, kwargs)
    result = pipeline.generate_all()
    print_banner(pipeline.config, result, mode="watch")

    watcher = ContentWatcher(pipeline.config)
    try:
        asyncio.run(pipeline.run_forever(watcher))
    except KeyboardInterrupt:
        watcher.stop()
