"""Event model for the generation pipeline.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Content events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DocumentCompiled:
    """A source file was compiled and stored.

    Attributes:
        path: Absolute path to the source file.
        language: Language the document was stored under.
        canonical_path: Key of the document within its language.
        compile_ms: Time spent reading, parsing and rendering.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    language: str
    canonical_path: str
    compile_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class DocumentRemoved:
    """A source file was deleted and its document dropped from the store."""

    path: str
    language: str
    canonical_path: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class CompileFailed:
    """A source file was skipped because it could not be compiled.

    Attributes:
        path: Absolute path to the source file.
        error: One-line description of the failure.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Output events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ArtifactWritten:
    """A JSON artifact was written.

    Attributes:
        kind: Which artifact.
        language: Language the artifact belongs to.
        target: Absolute output path.
        duration_ms: Time spent serializing and writing.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: Literal["document", "combined", "ordered", "menu"]
    language: str
    target: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ViewsRebuilt:
    """A language's ordered list and menu tree were recomputed.

    Attributes:
        language: Language that was refreshed.
        documents: Documents in the ordered list.
        categories: Categories in the menu (0 when the menu failed).
        duration_ms: Time spent ordering, grouping and writing.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    language: str
    documents: int
    categories: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PipelineFailed:
    """A step not tied to one source failed: a menu, an artifact write, an event.

    Attributes:
        stage: Which step failed (``Menu``, ``Output``, ``Pipeline``).
        subject: Language tag or file name the step was working on.
        error: One-line description of the failure.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    stage: str
    subject: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type PipelineEvent = (
    DocumentCompiled
    | DocumentRemoved
    | CompileFailed
    | ArtifactWritten
    | ViewsRebuilt
    | PipelineFailed
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
