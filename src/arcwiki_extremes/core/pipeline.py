# ABOUTME: End-to-end harvest: catalog load, note-count enrichment, seed merge, aggregation
# ABOUTME: Produces the extremes artifact and the run statistics the CLI reports

from __future__ import annotations

from dataclasses import dataclass

from arcwiki_extremes.core.aggregator import Artifact, aggregate, artifact_to_json
from arcwiki_extremes.core.models import SongCatalog
from arcwiki_extremes.core.pool import DEFAULT_CONCURRENCY, NoteCountEnricher, PoolStats, ProgressCallback
from arcwiki_extremes.core.seed import merge_reserved_seed
from arcwiki_extremes.extraction.base import NoteCountExtractor
from arcwiki_extremes.extraction.catalog import load_catalog
from arcwiki_extremes.extraction.wiki.client import WikiFetcher
from arcwiki_extremes.utils.logging import with_pipeline_context


@dataclass
class HarvestResult:
    """Everything one harvest run produced."""

    catalog: SongCatalog
    artifact: Artifact
    stats: PoolStats

    @property
    def artifact_json(self) -> str:
        return artifact_to_json(self.artifact)

    @property
    def record_count(self) -> int:
        return sum(len(records) for records in self.artifact.values())


class HarvestPipeline:
    """Runs the harvest stages in order against one fetcher.

    Catalog loading failures propagate and abort the run. Per-song fetch
    failures during enrichment do not; those songs keep unset note counts.
    """

    def __init__(
        self,
        fetcher: WikiFetcher,
        extractor: NoteCountExtractor | None = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        self.fetcher = fetcher
        self.enricher = NoteCountEnricher(fetcher, extractor=extractor, concurrency=concurrency)

    async def run(self, on_progress: ProgressCallback | None = None) -> HarvestResult:
        with with_pipeline_context("harvest", base_url=self.fetcher.base_url) as log:
            log.info("Loading song catalog")
            catalog = await load_catalog(self.fetcher)

            stats = await self.enricher.enrich(catalog, on_progress=on_progress)
            merge_reserved_seed(catalog)

            artifact = aggregate(catalog.difficulties())
            result = HarvestResult(catalog=catalog, artifact=artifact, stats=stats)
            log.info(
                "Harvest complete",
                songs=len(catalog),
                charts=len(catalog.difficulties()),
                records=result.record_count,
                failed_pages=stats.failed,
            )
            return result
