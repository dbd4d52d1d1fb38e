# ABOUTME: Domain models for chart metadata, rating buckets and published extreme records
# ABOUTME: SongCatalog holds the per-song chart lists that enrichment fills in

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import IntEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class DifficultyTier(IntEnum):
    """Ordered difficulty ranks, numbered as upstream's ``ratingClass``."""

    PAST = 0
    PRESENT = 1
    FUTURE = 2
    BEYOND = 3
    ETERNAL = 4

    @property
    def label(self) -> str:
        return self.name.title()


class RatingBucket(NamedTuple):
    """Grouping key for aggregation: numeric rating plus the ``+`` modifier."""

    rating: int
    plus: bool

    @property
    def label(self) -> str:
        return f"{self.rating}{'+' if self.plus else ''}"


class SongDifficulty(BaseModel):
    """One chart: a (song, tier) pair with its rating and, once enriched, its note count."""

    song_name: str
    tier: DifficultyTier
    rating: int
    rating_plus: bool = False
    note_count: int | None = Field(default=None, description="Unknown until the song page is parsed")

    @property
    def bucket(self) -> RatingBucket:
        return RatingBucket(self.rating, self.rating_plus)

    @property
    def rating_full(self) -> str:
        return self.bucket.label


class ExtremeRecord(BaseModel):
    """A chart holding the minimum and/or maximum note count of its rating bucket."""

    model_config = ConfigDict(frozen=True)

    song_name: str
    rating_full: str
    tier_label: str
    note_count: int | None
    is_min: bool = False
    is_max: bool = False

    @classmethod
    def from_difficulty(
        cls, difficulty: SongDifficulty, *, is_min: bool = False, is_max: bool = False
    ) -> ExtremeRecord:
        return cls(
            song_name=difficulty.song_name,
            rating_full=difficulty.rating_full,
            tier_label=difficulty.tier.label,
            note_count=difficulty.note_count,
            is_min=is_min,
            is_max=is_max,
        )

    def to_wire(self) -> dict[str, Any]:
        """Published JSON shape; the flags only appear when set."""
        wire: dict[str, Any] = {
            "ratingFull": self.rating_full,
            "ratingClass": self.tier_label,
            "notes": self.note_count,
        }
        if self.is_min:
            wire["min"] = True
        if self.is_max:
            wire["max"] = True
        return wire


class SongCatalog:
    """Ordered mapping of song name to its charts.

    Iteration follows the order in which songs were first added, which is
    the order of the upstream song list.
    """

    def __init__(self, songs: Mapping[str, Iterable[SongDifficulty]] | None = None):
        self._songs: dict[str, list[SongDifficulty]] = {}
        for name, difficulties in (songs or {}).items():
            self._songs[name] = list(difficulties)

    def add(self, difficulty: SongDifficulty) -> None:
        self._songs.setdefault(difficulty.song_name, []).append(difficulty)

    def replace(self, song_name: str, difficulties: Iterable[SongDifficulty]) -> None:
        self._songs[song_name] = list(difficulties)

    def song_names(self) -> list[str]:
        return list(self._songs)

    def difficulties(self) -> list[SongDifficulty]:
        return [d for charts in self._songs.values() for d in charts]

    def get(self, song_name: str) -> list[SongDifficulty]:
        return self._songs.get(song_name, [])

    def apply_note_counts(self, song_name: str, counts: Mapping[DifficultyTier, int | None]) -> int:
        """Copy each known count onto every chart of the song with that tier.

        Returns:
            Number of charts updated
        """
        updated = 0
        for difficulty in self._songs.get(song_name, []):
            count = counts.get(difficulty.tier)
            if count is not None:
                difficulty.note_count = count
                updated += 1
        return updated

    def __contains__(self, song_name: object) -> bool:
        return song_name in self._songs

    def __iter__(self) -> Iterator[str]:
        return iter(self._songs)

    def __len__(self) -> int:
        return len(self._songs)
