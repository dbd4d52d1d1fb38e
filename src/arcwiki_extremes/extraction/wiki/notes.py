# ABOUTME: Regex extraction of per-tier note counts from raw song page wikitext
# ABOUTME: Missing or non-numeric template fields yield None instead of failing

import re

from arcwiki_extremes.core.models import DifficultyTier


def _note_field_pattern(tier: DifficultyTier) -> re.Pattern[str]:
    # e.g. "|FutureNote= 1024\n|" or "|BeyondNote=1111}}"
    return re.compile(rf"\|{tier.label}Note=(.*?)[|}}]", re.DOTALL)


NOTE_PATTERNS: dict[DifficultyTier, re.Pattern[str]] = {tier: _note_field_pattern(tier) for tier in DifficultyTier}
_INTEGER = re.compile(r"[0-9]+")


def parse_note_count(value: str) -> int | None:
    """Parse a captured template value; anything but a plain integer is unset."""
    value = value.strip()
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


class WikitextNoteExtractor:
    """Reads ``|PastNote=``, ``|PresentNote=`` ... template parameters.

    Each tier is matched independently, so a page that only annotates some
    tiers still yields the counts it has.
    """

    def extract(self, raw_text: str) -> dict[DifficultyTier, int | None]:
        counts: dict[DifficultyTier, int | None] = {}
        for tier, pattern in NOTE_PATTERNS.items():
            match = pattern.search(raw_text)
            counts[tier] = parse_note_count(match.group(1)) if match else None
        return counts
