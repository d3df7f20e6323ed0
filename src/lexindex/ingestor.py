# src/lexindex/ingestor.py
"""Ingestion pipeline for LexIndex."""

import logging
import threading
import time
from collections.abc import Callable

from lexindex.chunker import Chunker, HeadingAwareChunker
from lexindex.embedder import Embedder
from lexindex.exceptions import EmbeddingProviderError, RateLimitError
from lexindex.locks import SourceLocks
from lexindex.models import ChunkDraft, EmbeddingRunResult, IngestResult, SourceStatus
from lexindex.stores import ChunkStore, SourceRegistry

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int, str], None]
"""Callback for ingestion progress updates.

Args:
    event: Event type: "chunking", "storing" or "embedding"
    current: Current progress count (0 to total)
    total: Total items to process
    message: Human-readable status message

Example:
    def on_progress(event: str, current: int, total: int, message: str) -> None:
        print(f"[{event}] {current}/{total}: {message}")
"""


class Ingestor:
    """Drives a source's content to a fully retrievable chunk set.

    Pipeline for ``ingest(source_id, content)``:
    1. Chunk the content (falls back to one whole-text chunk on failure)
    2. Replace the source's chunks in the store (atomic)
    3. Embed the source's unembedded chunks batch by batch, storing each
       batch's vectors before requesting the next

    Ingestion of the same source is serialised; different sources can be
    ingested concurrently from separate threads.
    """

    def __init__(
        self,
        chunk_store: ChunkStore,
        embedder: Embedder | None = None,
        chunker: Chunker | None = None,
        source_registry: SourceRegistry | None = None,
        batch_size: int = 50,
        inter_batch_delay: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
        locks: SourceLocks | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            chunk_store: Store for chunks and their vectors
            embedder: Embedder for chunk vectors. If None, ingestion stops
                after chunking and sources stay CHUNKED.
            chunker: Text chunker (default: HeadingAwareChunker())
            source_registry: Registry used by ingest_source and delete_source
            batch_size: Chunks per embedding request
            inter_batch_delay: Seconds to wait between embedding requests
            sleep: Sleep function, injectable for tests
            locks: Per-source locks, shareable between ingestors

        Raises:
            ValueError: If batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.chunk_store = chunk_store
        self.embedder = embedder
        self.chunker = chunker or HeadingAwareChunker()
        self.source_registry = source_registry
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self._sleep = sleep
        self._locks = locks or SourceLocks()

    def ingest(
        self,
        source_id: str,
        content: str,
        *,
        block: bool = True,
        cancel_event: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Replace a source's chunks with freshly chunked content and embed them.

        Args:
            source_id: Source identifier
            content: The source's full raw text
            block: Wait for a running ingestion of the same source. If False,
                raise IngestionInProgressError instead.
            cancel_event: Set to stop embedding at the next batch boundary
            on_progress: Optional callback(event, current, total, message)

        Returns:
            IngestResult with chunk count and embedding run counts

        Raises:
            IngestionInProgressError: If block is False and the source is busy
            PersistenceError: If the chunks could not be replaced
        """

        def progress(event: str, current: int, total: int, message: str = "") -> None:
            if on_progress:
                on_progress(event, current, total, message)

        with self._locks.hold(source_id, blocking=block):
            progress("chunking", 0, 1, "Chunking content...")
            drafts, degraded = self._chunk(source_id, content)
            progress("chunking", 1, 1, f"Created {len(drafts)} chunks")

            progress("storing", 0, 1, f"Storing {len(drafts)} chunks...")
            self.chunk_store.replace_chunks(source_id, drafts)
            progress("storing", 1, 1, "Storing chunks complete")

            if self.embedder is None:
                logger.info("No embedder configured; source %s left unembedded", source_id)
                run = EmbeddingRunResult()
            else:
                run = self.embed_pending(
                    source_id, cancel_event=cancel_event, on_progress=on_progress
                )

            return IngestResult(
                source_id=source_id,
                chunks=len(drafts),
                degraded=degraded,
                embedding=run,
                status=self.chunk_store.source_status(source_id),
            )

    def ingest_source(
        self,
        source_id: str,
        *,
        block: bool = True,
        cancel_event: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest a source's stored content from the source registry.

        Raises:
            LookupError: If the source is unknown or has no content
        """
        if self.source_registry is None:
            raise RuntimeError("ingest_source requires a source_registry")
        source = self.source_registry.get(source_id)
        if source is None or source.content is None:
            raise LookupError(f"Source '{source_id}' not found or has no content")
        return self.ingest(
            source_id,
            source.content,
            block=block,
            cancel_event=cancel_event,
            on_progress=on_progress,
        )

    def embed_pending(
        self,
        source_id: str | None = None,
        *,
        cancel_event: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> EmbeddingRunResult:
        """Embed every chunk that has no vector yet.

        Safe to call repeatedly: each run resumes from whatever is still
        unembedded. Provider failures and malformed vectors skip their batch; a
        rate limit that outlasts the embedder's retries ends the run. None of
        these raise.

        Args:
            source_id: Restrict the run to one source (default: all sources)
            cancel_event: Set to stop at the next batch boundary
            on_progress: Optional callback(event, current, total, message)
        """
        if self.embedder is None:
            raise RuntimeError("embed_pending requires an embedder")

        pending = self.chunk_store.unembedded_chunks(source_id)
        total = len(pending)
        result = EmbeddingRunResult(total=total)
        if not pending:
            return result

        num_batches = (total + self.batch_size - 1) // self.batch_size
        logger.info("Embedding %d chunks in %d batches", total, num_batches)

        for start in range(0, total, self.batch_size):
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                result.skipped = total - start
                logger.info("Embedding cancelled; %d chunks left for a later run", result.skipped)
                break

            batch = pending[start : start + self.batch_size]
            batch_number = start // self.batch_size + 1
            try:
                vectors = self.embedder.embed_batch([chunk.embedding_text for chunk in batch])
            except RateLimitError as e:
                result.skipped = total - start
                logger.error(
                    "Batch %d/%d still rate limited after retries, stopping run: %s",
                    batch_number,
                    num_batches,
                    e,
                )
                break
            except EmbeddingProviderError as e:
                result.failed += len(batch)
                logger.error("Batch %d/%d skipped: %s", batch_number, num_batches, e)
            else:
                try:
                    result.processed += self.chunk_store.set_embeddings(
                        (chunk.id, vector) for chunk, vector in zip(batch, vectors, strict=True)
                    )
                except ValueError as e:
                    # Wrong count, dimension or non-finite values; nothing was written
                    result.failed += len(batch)
                    logger.error(
                        "Batch %d/%d skipped, malformed vectors: %s", batch_number, num_batches, e
                    )

            done = min(start + self.batch_size, total)
            if on_progress:
                on_progress("embedding", done, total, f"Embedded {result.processed}/{total} chunks")

            if done < total:
                self._sleep(self.inter_batch_delay)

        logger.info(
            "Embedding run finished: %d processed, %d failed, %d skipped of %d",
            result.processed,
            result.failed,
            result.skipped,
            total,
        )
        return result

    def delete_source(self, source_id: str) -> int:
        """Delete a source's chunks, then the source itself. Returns chunks deleted."""
        with self._locks.hold(source_id):
            deleted = self.chunk_store.delete_by_source(source_id)
            if self.source_registry is not None:
                self.source_registry.delete(source_id)
        return deleted

    def status(self, source_id: str) -> SourceStatus:
        return self.chunk_store.source_status(source_id)

    def _chunk(self, source_id: str, content: str) -> tuple[list[ChunkDraft], bool]:
        """Chunk content, degrading to a single chunk if the chunker fails."""
        try:
            return self.chunker.chunk(content), False
        except Exception as e:
            logger.warning(
                "Chunking failed for source %s, storing it as one chunk: %s", source_id, e
            )
        if isinstance(content, bytes):
            text = content.decode("utf-8", errors="replace")
        else:
            text = str(content)
        text = text.replace("\x00", "").strip()
        return ([ChunkDraft(content=text)] if text else []), True
