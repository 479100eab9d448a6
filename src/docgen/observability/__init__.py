"""Pipeline observability: structured events for every generation step.

Records compilations, removals, artifact writes, view refreshes and
every failure as frozen dataclasses with nanosecond timestamps, safe for
concurrent production from the event loop and worker threads.

Quick Start:
    >>> from docgen.observability import EventLog, PipelineCollector
    >>> log = EventLog()
    >>> collector = PipelineCollector(log)
    >>> # Pass collector to DocgenPipeline; inspect log.query(...) afterwards

"""

from docgen.observability.collector import PipelineCollector
from docgen.observability.events import (
    ArtifactWritten,
    CompileFailed,
    DocumentCompiled,
    DocumentRemoved,
    PipelineEvent,
    PipelineFailed,
    ViewsRebuilt,
    now_ns,
)
from docgen.observability.log import EventLog

__all__ = [
    "ArtifactWritten",
    "CompileFailed",
    "DocumentCompiled",
    "DocumentRemoved",
    "EventLog",
    "PipelineCollector",
    "PipelineEvent",
    "PipelineFailed",
    "ViewsRebuilt",
    "now_ns",
]
