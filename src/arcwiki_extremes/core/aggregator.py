# ABOUTME: Finds the lowest and highest note-count chart in every rating bucket
# ABOUTME: Sorts charts, groups contiguous buckets, and indexes the extremes by song name

from __future__ import annotations

import itertools
import json
from collections.abc import Iterable, Mapping
from operator import attrgetter

from arcwiki_extremes.core.models import ExtremeRecord, RatingBucket, SongDifficulty

Artifact = dict[str, list[ExtremeRecord]]


def sort_key(difficulty: SongDifficulty) -> tuple[int, bool, bool, int]:
    """Order by rating, then plain before ``+``, then note count.

    A chart whose note count is unknown sorts ahead of every known count in
    its bucket, so it can be reported as the bucket minimum (with ``notes``
    null) but never as the maximum of a bucket that has known counts.
    """
    has_count = difficulty.note_count is not None
    return (difficulty.rating, difficulty.rating_plus, has_count, difficulty.note_count or 0)


def sort_difficulties(difficulties: Iterable[SongDifficulty]) -> list[SongDifficulty]:
    return sorted(difficulties, key=sort_key)


def group_by_bucket(ordered: Iterable[SongDifficulty]) -> list[tuple[RatingBucket, list[SongDifficulty]]]:
    """Split an already-sorted sequence into runs sharing a rating bucket."""
    return [(bucket, list(run)) for bucket, run in itertools.groupby(ordered, key=attrgetter("bucket"))]


def bucket_extremes(run: list[SongDifficulty]) -> list[ExtremeRecord]:
    """Min and max of one sorted bucket: its first and last chart.

    When both belong to the same song a single record carries both flags.
    """
    first, last = run[0], run[-1]
    if first.song_name == last.song_name:
        return [ExtremeRecord.from_difficulty(first, is_min=True, is_max=True)]
    return [
        ExtremeRecord.from_difficulty(first, is_min=True),
        ExtremeRecord.from_difficulty(last, is_max=True),
    ]


def aggregate(difficulties: Iterable[SongDifficulty]) -> Artifact:
    """Map each song to the extreme records it holds, in ascending bucket order."""
    artifact: Artifact = {}
    for _bucket, run in group_by_bucket(sort_difficulties(difficulties)):
        if not run:
            continue
        artifact.setdefault(run[0].song_name, [])
        artifact.setdefault(run[-1].song_name, [])
        for record in bucket_extremes(run):
            artifact[record.song_name].append(record)
    return artifact


def artifact_to_wire(artifact: Mapping[str, Iterable[ExtremeRecord]]) -> dict[str, list[dict]]:
    return {song: [record.to_wire() for record in records] for song, records in artifact.items()}


def artifact_to_json(artifact: Mapping[str, Iterable[ExtremeRecord]], indent: int | None = None) -> str:
    """Serialize the artifact in the shape published to the wiki."""
    return json.dumps(artifact_to_wire(artifact), ensure_ascii=False, indent=indent)
