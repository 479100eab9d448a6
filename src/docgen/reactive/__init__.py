"""Reactive layer: file changes flow through to regenerated artifacts.

Connects the content watcher to the content store, the derived views and
the artifact writer, one task per change.
"""

from docgen.reactive.locks import KeyedLocks
from docgen.reactive.pipeline import DocgenPipeline, GenerateResult

__all__ = [
    "DocgenPipeline",
    "GenerateResult",
    "KeyedLocks",
]
