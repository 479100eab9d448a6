"""Generation pipeline: connects the watcher to the content store and artifacts.

Orchestrates the full change propagation flow:
    1. A source file is enumerated at startup or reported by the watcher
    2. Ignored sources are dropped before any work is done
    3. The DocumentCompiler turns the source into a Document
    4. The ContentStore is updated (upsert, or removal for deletions)
    5. The affected language's ordered list and menu tree are recomputed
    6. Combined, ordered and menu artifacts are rewritten for that language

Concurrency:
    Every watcher event runs as its own task.  Work on one document is
    serialized by a lock keyed on ``(language, canonical_path)``, so updates
    to one document apply in arrival order; refreshes of one language are
    serialized by a lock keyed on the language.  Reads, renders and writes
    run in worker threads.

Directories:
    A directory moved into the content tree is walked like the startup scan.
    A deleted path that is not a source drops every document stored below
    it, so a directory moved out of the tree leaves no stale entries.

Failures stay local: a source that cannot be compiled is reported and
skipped (its previous document, if any, stays in the store).  A failed
write is reported without touching other events or other languages; the
views of its language are still rewritten from the store.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from docgen._errors import (
    ArtifactWriteError,
    ConfigError,
    ContentError,
    MenuError,
    PathDerivationError,
)
from docgen.content.compiler import DocumentCompiler
from docgen.content.paths import (
    SOURCE_SUFFIX,
    DocumentLocation,
    PathMapper,
    iter_source_files,
)
from docgen.content.store import ContentStore
from docgen.derive.menu import build_menu
from docgen.derive.ordering import order_documents
from docgen.export.artifacts import ArtifactWriter
from docgen.observability.collector import PipelineCollector
from docgen.observability.events import PipelineFailed, now_ns
from docgen.reactive.locks import KeyedLocks

if TYPE_CHECKING:
    from docgen.config import DocgenConfig
    from docgen.content.compiler import Document
    from docgen.content.watcher import ChangeEvent, ContentWatcher


@dataclass(frozen=True, slots=True)
class GenerateResult:
    """Aggregate result of a full generation pass.

    Attributes:
        documents: Documents in the store after the pass.
        failures: Sources that were skipped.
        languages: Languages whose views were written.
        duration_ms: Total wall-clock time for the pass.
        output_dir: Absolute path to the output directory.
        errors: Menu and artifact failures reported during the pass.

    """

    documents: int
    failures: tuple[Path, ...]
    languages: tuple[str, ...]
    duration_ms: float
    output_dir: Path
    errors: int = 0


class DocgenPipeline:
    """Owns the content store and keeps the generated artifacts in step with it.

    Args:
        config: Frozen docgen configuration.
        compiler: Document compiler. Defaults to one rendering with Patitas.
        store: Content store. Defaults to an empty store for every
            configured language.
        writer: Artifact writer. Defaults to one reporting to ``collector``.
        collector: Receives pipeline events and failure reports.

    """

    def __init__(
        self,
        config: DocgenConfig,
        *,
        compiler: DocumentCompiler | None = None,
        store: ContentStore | None = None,
        writer: ArtifactWriter | None = None,
        collector: PipelineCollector | None = None,
    ) -> None:
        self._config = config
        self._collector = collector if collector is not None else PipelineCollector()
        self._mapper = PathMapper.from_config(config)

        if compiler is None:
            from docgen.content.renderer import MarkdownRenderer

            compiler = DocumentCompiler(self._mapper, MarkdownRenderer(), config.split_string)
        self._compiler = compiler
        self._store = store if store is not None else ContentStore(config.languages)
        self._writer = writer if writer is not None else ArtifactWriter(self._collector)
        self._locks = KeyedLocks()

    @property
    def config(self) -> DocgenConfig:
        return self._config

    @property
    def store(self) -> ContentStore:
        return self._store

    @property
    def collector(self) -> PipelineCollector:
        return self._collector

    @property
    def mapper(self) -> PathMapper:
        return self._mapper

    def is_ignored(self, path: Path) -> bool:
        """Whether ``path`` is skipped: not markdown, or matches an ignore pattern."""
        if path.suffix != SOURCE_SUFFIX:
            return True
        text = str(path)
        return any(pattern in text for pattern in self._config.ignore_files)

    # ------------------------------------------------------------------
    # Synchronous steps (run directly at startup, in threads afterwards)
    # ------------------------------------------------------------------

    def generate(self, source: Path) -> Document | None:
        """Compile ``source``, store it and write its document artifact.

        Returns None, leaving the store untouched, when the source cannot
        be compiled.

        Raises:
            ArtifactWriteError: If the document artifact cannot be written.

        """
        start = time.perf_counter()
        try:
            document = self._compiler.compile(source)
        except ContentError as exc:
            stage = "Path" if isinstance(exc, PathDerivationError) else "Parse"
            self._collector.record_failure(str(source), exc, stage=stage)
            return None
        compile_ms = (time.perf_counter() - start) * 1000

        self._store.upsert(document.language, document.canonical_path, document)
        self._collector.record_compiled(
            str(source),
            language=document.language,
            canonical_path=document.canonical_path,
            compile_ms=compile_ms,
        )
        self._writer.write_document(document, self._mapper.output_path(source))
        return document

    def write_views(self, language: str) -> None:
        """Recompute and write the combined, ordered and menu artifacts of ``language``.

        A menu that cannot be built is reported and skipped; the combined
        and ordered artifacts are still written.

        Raises:
            ArtifactWriteError: If an artifact cannot be written.

        """
        start = time.perf_counter()
        config = self._config
        snapshot = self._store.snapshot(language)
        ordered = order_documents(snapshot)

        self._writer.write_combined(
            language, snapshot, config.output_file(config.combined_content_file, language)
        )
        self._writer.write_ordered(
            language, ordered, config.output_file(config.ordered_content_file, language)
        )

        categories = 0
        try:
            menu = build_menu(ordered)
        except MenuError as exc:
            self._collector.record_error("Menu", language, exc)
        else:
            categories = len(menu)
            self._writer.write_menu(
                language, menu, config.output_file(config.menu_content_file, language)
            )

        self._collector.record_views(
            language,
            documents=len(ordered),
            categories=categories,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def generate_all(self) -> GenerateResult:
        """Full scan: compile every source, then write each language's views once.

        Raises:
            ConfigError: If the content directory does not exist.

        """
        start = time.perf_counter()
        start_ns = now_ns()
        content_root = self._config.content_path
        if not content_root.is_dir():
            msg = f"Content directory not found: {content_root}"
            raise ConfigError(msg)
        self._config.output_path.mkdir(parents=True, exist_ok=True)

        failures: list[Path] = []
        for source in iter_source_files(content_root):
            if self.is_ignored(source):
                continue
            try:
                document = self.generate(source)
            except Exception as exc:
                self._collector.record_failure(str(source), exc, stage="Generate")
                document = None
            if document is None:
                failures.append(source)

        written: list[str] = []
        for language in self._config.languages:
            try:
                self.write_views(language)
            except Exception as exc:
                self._collector.record_error("Output", language, exc)
                continue
            written.append(language)

        return GenerateResult(
            documents=len(self._store),
            failures=tuple(failures),
            languages=tuple(written),
            duration_ms=(time.perf_counter() - start) * 1000,
            output_dir=self._config.output_path,
            errors=len(self._collector.log.query(event_type=PipelineFailed, since_ns=start_ns)),
        )

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    async def handle_change(self, event: ChangeEvent) -> None:
        """Process a single change through the pipeline.

        Markdown sources are compiled or removed.  A directory created (or
        moved) below the content root is walked and every source in it
        compiled; a deleted path drops every document stored below it, so a
        directory moved out of the tree leaves nothing behind.

        Never raises: every failure is reported through the collector so
        one bad event cannot stop the watch loop.

        """
        path = event.path
        try:
            if not self.is_ignored(path):
                if event.kind == "deleted":
                    await self._handle_removal(path)
                else:
                    await self._handle_update(path)
            elif event.kind == "deleted":
                await self._handle_directory_removal(path)
            elif event.kind == "created" and await asyncio.to_thread(path.is_dir):
                await self._handle_directory_update(path)
        except Exception as exc:
            self._collector.record_error("Pipeline", path.name, exc)

    async def refresh_language(self, language: str) -> None:
        """Recompute and persist one language's derived views."""
        async with self._locks.hold(("language", language)):
            await asyncio.to_thread(self.write_views, language)

    async def run_forever(self, watcher: ContentWatcher) -> None:
        """Start ``watcher`` and handle its events until it stops.

        Each event runs in its own task; pending tasks are awaited on exit.

        """
        watcher.start()
        tasks: set[asyncio.Task[None]] = set()
        try:
            async for event in watcher.changes():
                task = asyncio.create_task(self.handle_change(event))
                tasks.add(task)
                task.add_done_callback(tasks.discard)
        finally:
            watcher.stop()
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)

    async def _handle_update(self, path: Path) -> None:
        """Created or modified source: compile -> upsert -> write -> refresh."""
        language = await self._update_document(path)
        if language is not None:
            await self.refresh_language(language)

    async def _handle_removal(self, path: Path) -> None:
        """Deleted source: remove from store -> delete output -> refresh.

        The store key comes from the path alone; the file is already gone.
        """
        try:
            location = self._mapper.locate(path)
        except PathDerivationError as exc:
            self._collector.record_failure(str(path), exc, stage="Path")
            return

        await self._remove_document(location, path)
        await self.refresh_language(location.language)

    async def _handle_directory_update(self, directory: Path) -> None:
        """Directory moved in: compile every source below it, then refresh once per language."""
        sources = await asyncio.to_thread(list, iter_source_files(directory))
        languages = await asyncio.gather(
            *(self._update_document(source) for source in sources if not self.is_ignored(source))
        )
        for language in dict.fromkeys(lang for lang in languages if lang is not None):
            await self.refresh_language(language)

    async def _handle_directory_removal(self, directory: Path) -> None:
        """Path gone: drop every stored document below it, then refresh its language."""
        try:
            language, prefix = self._mapper.locate_prefix(directory)
        except PathDerivationError:
            # Outside every configured language, so nothing below it was stored.
            return

        doomed = [
            document
            for canonical_path, document in self._store.snapshot(language).items()
            if canonical_path.startswith(prefix)
        ]
        if not doomed:
            return
        for document in doomed:
            location = DocumentLocation(
                full_path=document.full_path,
                canonical_path=document.canonical_path,
                language=document.language,
            )
            source = document.source or directory / (
                document.canonical_path.removeprefix(prefix) + SOURCE_SUFFIX
            )
            await self._remove_document(location, source)
        await self.refresh_language(language)

    async def _update_document(self, path: Path) -> str | None:
        """Compile, store and write one source.

        Returns the language whose views must be refreshed, or None when the
        store did not change.
        """
        try:
            location = self._mapper.locate(path)
        except PathDerivationError as exc:
            self._collector.record_failure(str(path), exc, stage="Path")
            return None

        async with self._locks.hold(("document", location.language, location.canonical_path)):
            try:
                document = await asyncio.to_thread(self.generate, path)
            except ArtifactWriteError as exc:
                # The new document is already stored; its language's views must follow.
                self._collector.record_error("Output", path.name, exc)
                return location.language
        return location.language if document is not None else None

    async def _remove_document(self, location: DocumentLocation, source: Path) -> None:
        """Drop one document from the store and delete its artifact."""
        async with self._locks.hold(("document", location.language, location.canonical_path)):
            removed = self._store.remove(location.language, location.canonical_path)
            if removed is not None:
                self._collector.record_removed(
                    str(source),
                    language=location.language,
                    canonical_path=location.canonical_path,
                )
            try:
                await asyncio.to_thread(self._writer.delete, self._mapper.output_path(source))
            except ArtifactWriteError as exc:
                self._collector.record_error("Output", source.name, exc)
