# ABOUTME: Literal chart records for the one song whose wiki entry cannot be used
# ABOUTME: Merged into the catalog after enrichment, replacing anything upstream supplied

from arcwiki_extremes.core.models import DifficultyTier, SongCatalog, SongDifficulty

RESERVED_SONG_NAME = "Last"

# "Last" is split across several song list entries upstream (including a
# Beyond 9 and a Beyond 9+ chart), so its charts are fixed here.
RESERVED_SONG_SEED: tuple[SongDifficulty, ...] = (
    SongDifficulty(song_name=RESERVED_SONG_NAME, tier=DifficultyTier.PAST, rating=4, note_count=680),
    SongDifficulty(song_name=RESERVED_SONG_NAME, tier=DifficultyTier.PRESENT, rating=7, note_count=781),
    SongDifficulty(song_name=RESERVED_SONG_NAME, tier=DifficultyTier.FUTURE, rating=9, note_count=831),
    SongDifficulty(song_name=RESERVED_SONG_NAME, tier=DifficultyTier.BEYOND, rating=9, note_count=888),
    SongDifficulty(
        song_name=RESERVED_SONG_NAME, tier=DifficultyTier.BEYOND, rating=9, rating_plus=True, note_count=790
    ),
)


def merge_reserved_seed(catalog: SongCatalog) -> SongCatalog:
    """Set the reserved song's charts to fresh copies of the seed."""
    catalog.replace(RESERVED_SONG_NAME, (d.model_copy() for d in RESERVED_SONG_SEED))
    return catalog
