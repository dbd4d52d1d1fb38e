# ABOUTME: Tests for chart models and the song catalog
# ABOUTME: Covers tier labels, rating buckets, wire records and note-count merging

import pytest
from pydantic import ValidationError

from arcwiki_extremes.core.models import (
    DifficultyTier,
    ExtremeRecord,
    RatingBucket,
    SongCatalog,
    SongDifficulty,
)


class TestDifficultyTier:
    @pytest.mark.parametrize(
        "tier,label",
        [
            (DifficultyTier.PAST, "Past"),
            (DifficultyTier.PRESENT, "Present"),
            (DifficultyTier.FUTURE, "Future"),
            (DifficultyTier.BEYOND, "Beyond"),
            (DifficultyTier.ETERNAL, "Eternal"),
        ],
    )
    def test_labels(self, tier, label):
        assert tier.label == label

    def test_numbering_matches_rating_class(self):
        assert DifficultyTier(3) is DifficultyTier.BEYOND


class TestSongDifficulty:
    def test_bucket_and_rating_full(self):
        difficulty = SongDifficulty(song_name="Song", tier=DifficultyTier.FUTURE, rating=10, rating_plus=True)

        assert difficulty.bucket == RatingBucket(10, True)
        assert difficulty.rating_full == "10+"
        assert difficulty.note_count is None


class TestExtremeRecord:
    def test_wire_omits_unset_flags(self):
        record = ExtremeRecord(song_name="A", rating_full="7", tier_label="Future", note_count=100, is_min=True)

        assert record.to_wire() == {"ratingFull": "7", "ratingClass": "Future", "notes": 100, "min": True}

    def test_wire_with_both_flags_and_unknown_notes(self):
        record = ExtremeRecord(
            song_name="A", rating_full="9+", tier_label="Beyond", note_count=None, is_min=True, is_max=True
        )

        assert record.to_wire() == {
            "ratingFull": "9+",
            "ratingClass": "Beyond",
            "notes": None,
            "min": True,
            "max": True,
        }

    def test_records_are_frozen(self):
        record = ExtremeRecord(song_name="A", rating_full="7", tier_label="Future", note_count=1)

        with pytest.raises(ValidationError):
            record.note_count = 2


class TestSongCatalog:
    def test_insertion_order_and_lookup(self):
        catalog = SongCatalog()
        catalog.add(SongDifficulty(song_name="B", tier=DifficultyTier.PAST, rating=2))
        catalog.add(SongDifficulty(song_name="A", tier=DifficultyTier.PAST, rating=1))
        catalog.add(SongDifficulty(song_name="B", tier=DifficultyTier.FUTURE, rating=8))

        assert catalog.song_names() == ["B", "A"]
        assert list(catalog) == ["B", "A"]
        assert len(catalog.get("B")) == 2
        assert catalog.get("missing") == []
        assert "A" in catalog

    def test_apply_note_counts_updates_every_matching_tier(self):
        catalog = SongCatalog(
            {
                "Split": [
                    SongDifficulty(song_name="Split", tier=DifficultyTier.BEYOND, rating=9),
                    SongDifficulty(song_name="Split", tier=DifficultyTier.BEYOND, rating=9, rating_plus=True),
                    SongDifficulty(song_name="Split", tier=DifficultyTier.PAST, rating=4),
                ]
            }
        )

        updated = catalog.apply_note_counts("Split", {DifficultyTier.BEYOND: 888, DifficultyTier.PAST: None})

        assert updated == 2
        assert [d.note_count for d in catalog.get("Split")] == [888, 888, None]

    def test_apply_note_counts_unknown_song(self):
        assert SongCatalog().apply_note_counts("Nope", {DifficultyTier.PAST: 1}) == 0
