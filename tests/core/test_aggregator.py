# ABOUTME: Tests for per-bucket min/max aggregation and artifact serialization
# ABOUTME: Includes the unset note-count ordering and the reserved song seed

import json

import pytest

from arcwiki_extremes.core.aggregator import (
    aggregate,
    artifact_to_json,
    group_by_bucket,
    sort_difficulties,
)
from arcwiki_extremes.core.models import DifficultyTier, RatingBucket, SongCatalog, SongDifficulty
from arcwiki_extremes.core.seed import RESERVED_SONG_NAME, RESERVED_SONG_SEED, merge_reserved_seed


def chart(song, rating, notes, tier=DifficultyTier.FUTURE, plus=False):
    return SongDifficulty(song_name=song, tier=tier, rating=rating, rating_plus=plus, note_count=notes)


class TestSortAndGroup:
    """Ordering by rating, plus flag, then note count."""

    def test_sort_order(self):
        charts = [chart("a", 9, 900, plus=True), chart("b", 9, 1000), chart("c", 8, 2000), chart("d", 9, 800)]

        assert [c.song_name for c in sort_difficulties(charts)] == ["c", "d", "b", "a"]

    def test_groups_contiguous_buckets(self):
        charts = sort_difficulties([chart("a", 9, 1), chart("b", 9, 2, plus=True), chart("c", 9, 3)])

        groups = group_by_bucket(charts)

        assert [bucket for bucket, _ in groups] == [RatingBucket(9, False), RatingBucket(9, True)]
        assert [len(run) for _, run in groups] == [2, 1]


class TestAggregate:
    """Min and max selection per bucket."""

    def test_min_and_max_of_three_songs(self):
        artifact = aggregate([chart("A", 7, 100), chart("B", 7, 300), chart("C", 7, 200)])

        assert list(artifact) == ["A", "B"]
        (a_record,) = artifact["A"]
        (b_record,) = artifact["B"]
        assert (a_record.note_count, a_record.is_min, a_record.is_max) == (100, True, False)
        assert (b_record.note_count, b_record.is_min, b_record.is_max) == (300, False, True)
        assert "C" not in artifact

    def test_single_chart_bucket_has_both_flags(self):
        artifact = aggregate([chart("Solo", 9, 1234, tier=DifficultyTier.BEYOND, plus=True)])

        (record,) = artifact["Solo"]
        assert record.is_min and record.is_max
        assert record.rating_full == "9+"
        assert record.tier_label == "Beyond"

    def test_same_song_at_both_ends_yields_one_record(self):
        artifact = aggregate(
            [chart("Solo", 10, 1400, tier=DifficultyTier.FUTURE), chart("Solo", 10, 1500, tier=DifficultyTier.BEYOND)]
        )

        (record,) = artifact["Solo"]
        assert record.is_min and record.is_max
        assert record.note_count == 1400
        assert record.tier_label == "Future"

    def test_song_collects_records_across_buckets_in_order(self):
        artifact = aggregate(
            [
                chart("B", 8, 400),
                chart("A", 7, 100),
                chart("D", 8, 900),
                chart("B", 7, 300, tier=DifficultyTier.PRESENT),
            ]
        )

        assert list(artifact) == ["A", "B", "D"]
        assert [(r.rating_full, r.is_min, r.is_max) for r in artifact["B"]] == [("7", False, True), ("8", True, False)]

    def test_unset_note_count_sorts_first(self):
        artifact = aggregate([chart("Known", 9, 500), chart("Unknown", 9, None), chart("Known2", 9, 700)])

        (minimum,) = artifact["Unknown"]
        (maximum,) = artifact["Known2"]
        assert minimum.is_min and minimum.note_count is None
        assert maximum.is_max and maximum.note_count == 700
        assert "Known" not in artifact

    def test_empty_input(self):
        assert aggregate([]) == {}


class TestArtifactJson:
    """Wire serialization of the artifact."""

    def test_wire_shape(self):
        artifact = aggregate([chart("A", 7, 100, tier=DifficultyTier.PRESENT), chart("B", 7, 300)])

        assert json.loads(artifact_to_json(artifact)) == {
            "A": [{"ratingFull": "7", "ratingClass": "Present", "notes": 100, "min": True}],
            "B": [{"ratingFull": "7", "ratingClass": "Future", "notes": 300, "max": True}],
        }

    def test_unicode_names_kept_verbatim(self):
        artifact = aggregate([chart("妖艶魔女", 8, 800)])

        assert "妖艶魔女" in artifact_to_json(artifact)


class TestReservedSeed:
    """The reserved song always carries exactly the seeded charts."""

    def test_seed_contents(self):
        assert [(d.tier, d.rating_full, d.note_count) for d in RESERVED_SONG_SEED] == [
            (DifficultyTier.PAST, "4", 680),
            (DifficultyTier.PRESENT, "7", 781),
            (DifficultyTier.FUTURE, "9", 831),
            (DifficultyTier.BEYOND, "9", 888),
            (DifficultyTier.BEYOND, "9+", 790),
        ]

    @pytest.mark.parametrize(
        "existing",
        [
            [],
            [SongDifficulty(song_name=RESERVED_SONG_NAME, tier=DifficultyTier.FUTURE, rating=9, note_count=1)],
        ],
    )
    def test_merge_replaces_catalog_entry(self, existing):
        catalog = SongCatalog({RESERVED_SONG_NAME: existing} if existing else None)

        merge_reserved_seed(catalog)

        assert catalog.get(RESERVED_SONG_NAME) == list(RESERVED_SONG_SEED)

    def test_merged_records_are_copies(self):
        catalog = merge_reserved_seed(SongCatalog())

        catalog.get(RESERVED_SONG_NAME)[0].note_count = 0

        assert RESERVED_SONG_SEED[0].note_count == 680

    def test_seed_takes_lone_beyond_nine_plus(self):
        catalog = merge_reserved_seed(SongCatalog())
        catalog.add(chart("Other", 9, 1000, plus=False))

        artifact = aggregate(catalog.difficulties())

        nine_plus = [r for r in artifact[RESERVED_SONG_NAME] if r.rating_full == "9+"]
        assert len(nine_plus) == 1
        assert nine_plus[0].is_min and nine_plus[0].is_max
        assert nine_plus[0].note_count == 790
