"""
Vault collection: host-supplied raw notes -> normalized VaultSnapshot.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from paralens.core.task_extractor import ContentReader, TaskExtractor
from paralens.models.note import NoteRecord
from paralens.models.snapshot import RawNote, VaultSnapshot
from paralens.models.task import TaskRecord
from paralens.utils.logger import get_logger

logger = get_logger(__name__, operation="collect")

LOCATION_FIELD = "para"
HISTORY_FIELD = "para_history"
TAGS_FIELD = "tags"
REVIEW_FIELDS = ("review_interval", "review_cadence", "review")


def _frontmatter_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list | tuple | set):
        return [str(tag) for tag in value if tag is not None]
    return [str(value)]


def _review_value(frontmatter: Mapping[str, Any]) -> Any:
    for field in REVIEW_FIELDS:
        if frontmatter.get(field) is not None:
            return frontmatter[field]
    return None


class VaultCollector:
    """
    Builds a VaultSnapshot from raw notes.

    Metadata conventions:
    - `para`: current location
    - `para_history`: list of {from, to, timestamp|date}
    - `tags`: list or scalar, merged with inline #tags
    - `review_interval` / `review_cadence` / `review`: cadence override
    """

    def __init__(self, extractor: TaskExtractor | None = None):
        self.extractor = extractor or TaskExtractor()

    def build_note(self, raw: RawNote) -> NoteRecord:
        """
        Normalize one raw note.

        Raises:
            pydantic.ValidationError: If created/modified timestamps are unusable
        """
        frontmatter = raw.frontmatter or {}
        tags = _frontmatter_tags(frontmatter.get(TAGS_FIELD)) + list(raw.inline_tags)
        return NoteRecord(
            path=raw.path,
            basename=raw.basename or "",
            location=frontmatter.get(LOCATION_FIELD),
            history=frontmatter.get(HISTORY_FIELD),
            tags=tags,
            links=raw.links,
            review_interval_days=_review_value(frontmatter),
            created_at=raw.created,
            modified_at=raw.modified,
        )

    def collect(
        self,
        raw_notes: Iterable[RawNote | Mapping[str, Any]],
        reader: ContentReader | None = None,
        collected_at: datetime | None = None,
    ) -> VaultSnapshot:
        """
        Normalize notes and extract their tasks.

        Notes whose timestamps cannot be parsed are skipped with a warning.

        Args:
            raw_notes: Raw notes (models or plain dicts)
            reader: Content reader used when a note carries no inline content
            collected_at: Snapshot time (defaults to now, UTC)

        Returns:
            Frozen VaultSnapshot
        """
        notes: list[NoteRecord] = []
        tasks: list[TaskRecord] = []

        for item in raw_notes:
            try:
                raw = item if isinstance(item, RawNote) else RawNote.model_validate(item)
                note = self.build_note(raw)
            except PydanticValidationError as e:
                logger.warning(f"Skipping note with invalid metadata: {e.error_count()} error(s)")
                continue

            notes.append(note)

            if raw.content is not None:
                tasks.extend(
                    self.extractor.extract(raw.content, note.path, note.location, note.basename)
                )
            elif reader is not None:
                tasks.extend(
                    self.extractor.extract_file(note.path, note.location, reader, note.basename)
                )

        logger.info(f"Collected {len(notes)} notes and {len(tasks)} tasks")

        return VaultSnapshot(
            notes=notes,
            tasks=tasks,
            collected_at=collected_at or datetime.now(UTC),
        )
