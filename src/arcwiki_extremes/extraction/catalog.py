# ABOUTME: Loads the wiki song list and name-transition table into a SongCatalog
# ABOUTME: Resolves display names, drops unusable entries with a warning, never aborts on bad data

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from arcwiki_extremes.core.models import DifficultyTier, SongCatalog, SongDifficulty
from arcwiki_extremes.core.seed import RESERVED_SONG_NAME
from arcwiki_extremes.extraction.base import SkippedEntity
from arcwiki_extremes.extraction.wiki.client import WikiFetcher
from arcwiki_extremes.utils.logging import get_logger

SONGLIST_TITLE = "Template:Songlist.json"
TRANSITION_TITLE = "Template:Transition.json"

logger = get_logger(__name__)


def resolve_song_name(song: Mapping[str, Any], transition: Mapping[str, Any]) -> str:
    """Derive the wiki page name for a song list entry.

    The English title is first remapped through ``songNameToDisplayName``,
    then, if several songs share that display name, through ``sameName``
    keyed by the entry's id.

    Raises:
        SkippedEntity: If the entry has no English title
    """
    song_id = song.get("id")
    localized = song.get("title_localized") or {}
    name = localized.get("en") if isinstance(localized, Mapping) else None
    if not isinstance(name, str) or not name:
        raise SkippedEntity(song_id, "no valid English name")

    display_name = _lookup(transition.get("songNameToDisplayName"), name)
    if isinstance(display_name, str) and display_name:
        name = display_name

    variants = _lookup(transition.get("sameName"), name)
    resolved = _lookup(variants, song_id)
    if isinstance(resolved, str) and resolved:
        name = resolved
    elif variants:
        logger.warning("Shared song name has no entry for this id", song_id=song_id, song_name=name)

    return name


def _lookup(table: object, key: object) -> Any:
    if not isinstance(table, Mapping) or not isinstance(key, str):
        return None
    return table.get(key)


def parse_difficulty(song_name: str, song_id: object, raw: Any) -> SongDifficulty:
    """Turn one upstream difficulty entry into a chart record.

    Raises:
        SkippedEntity: If the tier or rating is not an integer, or the tier is unknown
    """
    if not isinstance(raw, Mapping):
        raise SkippedEntity(song_id, f"invalid difficulty {raw!r}")
    rating_class = raw.get("ratingClass")
    rating = raw.get("rating")
    if not _is_int(rating_class) or not _is_int(rating):
        raise SkippedEntity(song_id, f"invalid difficulty {dict(raw)!r}")
    try:
        tier = DifficultyTier(rating_class)
    except ValueError as e:
        raise SkippedEntity(song_id, f"unknown ratingClass {rating_class}") from e

    return SongDifficulty(
        song_name=song_name,
        tier=tier,
        rating=rating,
        rating_plus=bool(raw.get("ratingPlus")),
    )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def build_catalog(songlist: Mapping[str, Any], transition: Mapping[str, Any]) -> SongCatalog:
    """Build the catalog from already-decoded song list and transition documents."""
    catalog = SongCatalog()
    skipped = 0

    for index, song in enumerate(songlist.get("songs") or []):
        if not isinstance(song, Mapping):
            logger.warning("Skipping song", index=index, reason=f"invalid song entry {song!r}")
            skipped += 1
            continue

        song_id = song.get("id")
        if song.get("deleted"):
            continue

        try:
            name = resolve_song_name(song, transition)
        except SkippedEntity as e:
            logger.warning("Skipping song", song_id=e.entity_id, reason=e.reason)
            skipped += 1
            continue

        # Charts for this song come from core.seed
        if name == RESERVED_SONG_NAME:
            continue

        difficulties = song.get("difficulties")
        if not difficulties:
            logger.warning("Skipping song", song_id=song_id, song_name=name, reason="no valid difficulties")
            skipped += 1
            continue

        for raw in difficulties:
            try:
                catalog.add(parse_difficulty(name, song_id, raw))
            except SkippedEntity as e:
                logger.warning("Skipping difficulty", song_id=e.entity_id, song_name=name, reason=e.reason)
                skipped += 1

    logger.info(
        "Catalog built",
        songs=len(catalog),
        charts=len(catalog.difficulties()),
        skipped=skipped,
    )
    return catalog


async def load_catalog(fetcher: WikiFetcher) -> SongCatalog:
    """Fetch the song list and transition table together, then build the catalog.

    Both documents are required. Both fetches run to completion before the
    first failure, if any, propagates.
    """
    results = await asyncio.gather(
        fetcher.fetch_page_json(SONGLIST_TITLE),
        fetcher.fetch_page_json(TRANSITION_TITLE),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result

    songlist, transition = results
    return build_catalog(songlist, transition)
