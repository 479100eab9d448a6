"""Pipeline collector: records generation events into the event log.

Also the single place where problems are reported to a human: failures
are printed to stderr as one-line messages in addition to being logged.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from the event loop and worker threads.

"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from docgen.observability.events import (
    ArtifactWritten,
    CompileFailed,
    DocumentCompiled,
    DocumentRemoved,
    PipelineFailed,
    ViewsRebuilt,
    now_ns,
)
from docgen.observability.log import EventLog

if TYPE_CHECKING:
    from docgen._types import ArtifactKind


class PipelineCollector:
    """Event collector for the generation pipeline.

    Args:
        log: The EventLog to store events in.
        verbose: Print a line to stderr for every compiled or removed
            document, not only for failures.

    """

    __slots__ = ("_log", "_verbose")

    def __init__(self, log: EventLog | None = None, *, verbose: bool = False) -> None:
        self._log = log if log is not None else EventLog()
        self._verbose = verbose

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Content events -----

    def record_compiled(
        self,
        path: str,
        *,
        language: str,
        canonical_path: str,
        compile_ms: float = 0.0,
    ) -> None:
        """Record a successful compilation."""
        self._log.append(
            DocumentCompiled(
                path=path,
                language=language,
                canonical_path=canonical_path,
                compile_ms=compile_ms,
                timestamp_ns=now_ns(),
            )
        )
        if self._verbose:
            print(f"  Compiled {language}{canonical_path} ({compile_ms:.0f}ms)", file=sys.stderr)

    def record_removed(self, path: str, *, language: str, canonical_path: str) -> None:
        """Record a document dropped after its source was deleted."""
        self._log.append(
            DocumentRemoved(
                path=path,
                language=language,
                canonical_path=canonical_path,
                timestamp_ns=now_ns(),
            )
        )
        if self._verbose:
            print(f"  Removed {language}{canonical_path}", file=sys.stderr)

    def record_failure(self, path: str, error: BaseException, *, stage: str = "Parse") -> None:
        """Report a skipped source file."""
        message = str(error) or type(error).__name__
        self._log.append(CompileFailed(path=path, error=message, timestamp_ns=now_ns()))
        print(f"  {stage} error: {Path(path).name}: {message}", file=sys.stderr)

    # ----- Output events -----

    def record_artifact(
        self,
        kind: ArtifactKind,
        language: str,
        target: str,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a written artifact."""
        self._log.append(
            ArtifactWritten(
                kind=kind,
                language=language,
                target=target,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_views(
        self,
        language: str,
        *,
        documents: int = 0,
        categories: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a refresh of a language's derived views."""
        self._log.append(
            ViewsRebuilt(
                language=language,
                documents=documents,
                categories=categories,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_error(self, stage: str, subject: str, error: BaseException) -> None:
        """Report a failure not tied to one source: a menu, a write, a whole event.

        ``subject`` names what the step was working on, a language tag or
        a file name.
        """
        message = str(error) or type(error).__name__
        self._log.append(
            PipelineFailed(stage=stage, subject=subject, error=message, timestamp_ns=now_ns())
        )
        print(f"  {stage} error ({subject}): {message}", file=sys.stderr)
