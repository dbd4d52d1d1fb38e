# ABOUTME: Interfaces and errors shared by the wiki extraction layer
# ABOUTME: Defines the note-count extractor protocol and response/entity error types

from typing import Protocol

from arcwiki_extremes.core.models import DifficultyTier


class NoteCountExtractor(Protocol):
    """Protocol for pulling per-tier note counts out of a raw song page.

    Keeps the brittle page markup swappable and testable without the pipeline.
    """

    def extract(self, raw_text: str) -> dict[DifficultyTier, int | None]:
        """Extract note counts from raw page text.

        Args:
            raw_text: Unparsed page source

        Returns:
            A mapping with an entry for every tier; tiers the page does not
            annotate map to None
        """
        ...


class MalformedResponse(Exception):
    """Raised when an upstream response does not have the expected shape."""

    def __init__(self, title: str | None, reason: str):
        self.title = title
        self.reason = reason
        super().__init__(f"Response for {title!r} is malformed: {reason}")


class SkippedEntity(Exception):
    """Raised for an upstream entry that cannot be used. Logged and skipped, never fatal."""

    def __init__(self, entity_id: object, reason: str):
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"{entity_id}: {reason}")
