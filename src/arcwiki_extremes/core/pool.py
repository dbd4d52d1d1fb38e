# ABOUTME: Self-replenishing worker pool and the note-count enrichment built on it
# ABOUTME: Keeps a fixed number of song page fetches in flight until every song is visited

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from arcwiki_extremes.core.models import SongCatalog
from arcwiki_extremes.core.work_queue import WorkQueue
from arcwiki_extremes.extraction.base import NoteCountExtractor
from arcwiki_extremes.extraction.wiki.client import WikiFetcher
from arcwiki_extremes.extraction.wiki.notes import WikitextNoteExtractor
from arcwiki_extremes.utils.logging import get_logger

DEFAULT_CONCURRENCY = 20

ProgressCallback = Callable[[int, int], None]

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass
class PoolStats:
    """Outcome counts of one pool run."""

    total: int
    succeeded: int = 0
    failed: int = 0

    @property
    def completed(self) -> int:
        return self.succeeded + self.failed


class BoundedWorkerPool:
    """Runs a handler over a list of items with at most ``concurrency`` in flight.

    Each worker claims an item, runs it, and claims the next one as soon as
    it finishes, so the pool stays saturated until the list runs out. A
    failing item is logged and counted; its worker moves straight on.
    """

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self.concurrency = concurrency

    async def run(
        self,
        items: Iterable[T],
        handler: Callable[[T], Awaitable[object]],
        on_item_done: ProgressCallback | None = None,
    ) -> PoolStats:
        queue = WorkQueue(items)
        stats = PoolStats(total=len(queue))

        async def worker(worker_id: int) -> None:
            while (item := await queue.claim()) is not None:
                try:
                    await handler(item)
                except Exception as e:
                    stats.failed += 1
                    logger.warning(
                        "Work item failed",
                        item=item,
                        worker=worker_id,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                else:
                    stats.succeeded += 1
                if on_item_done is not None:
                    try:
                        on_item_done(stats.completed, stats.total)
                    except Exception as e:
                        logger.warning("Progress callback failed", worker=worker_id, error=str(e))

        async with asyncio.TaskGroup() as tg:
            for worker_id in range(min(self.concurrency, len(queue))):
                tg.create_task(worker(worker_id))

        return stats


class NoteCountEnricher:
    """Visits every song page once and merges the note counts it finds."""

    def __init__(
        self,
        fetcher: WikiFetcher,
        extractor: NoteCountExtractor | None = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        self.fetcher = fetcher
        self.extractor = extractor or WikitextNoteExtractor()
        self.pool = BoundedWorkerPool(concurrency)
        self._merge_lock = asyncio.Lock()

    async def enrich(self, catalog: SongCatalog, on_progress: ProgressCallback | None = None) -> PoolStats:
        """Fill in ``note_count`` on the catalog's charts in place.

        Songs whose page cannot be fetched or parsed keep unset counts.
        """

        async def visit(song_name: str) -> None:
            source = await self.fetcher.fetch_page_source(song_name)
            counts = self.extractor.extract(source)
            async with self._merge_lock:
                updated = catalog.apply_note_counts(song_name, counts)
            if not updated:
                logger.debug("No note counts found on page", song_name=song_name)

        song_names = [name for name in catalog.song_names() if name]
        logger.info("Enriching note counts", songs=len(song_names), concurrency=self.pool.concurrency)

        stats = await self.pool.run(song_names, visit, on_progress)

        logger.info("Enrichment finished", total=stats.total, succeeded=stats.succeeded, failed=stats.failed)
        return stats
