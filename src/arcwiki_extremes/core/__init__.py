# ABOUTME: Business logic and orchestration layer
# ABOUTME: Turns the enriched song catalog into per-rating note-count extremes

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Domain models (tiers, charts, rating buckets, extreme records)
- The bounded worker pool that enriches the catalog
- Extreme-value aggregation and end-to-end orchestration

Data Flow: extraction/ catalog + page sources -> Aggregation -> Published artifact
"""

from .models import (
    DifficultyTier,
    ExtremeRecord,
    RatingBucket,
    SongCatalog,
    SongDifficulty,
)

# Import the pool and pipeline on demand to avoid circular imports
# Use: from arcwiki_extremes.core.pipeline import HarvestPipeline

__all__ = [
    "DifficultyTier",
    "ExtremeRecord",
    "RatingBucket",
    "SongCatalog",
    "SongDifficulty",
]
