"""
Vault snapshot model.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from paralens.models.note import NoteRecord
from paralens.models.task import TaskRecord


class RawNote(BaseModel):
    """
    A note as supplied by the host, before normalization.

    `frontmatter` is the parsed metadata block verbatim. `content` may be
    omitted, in which case the collector asks a content reader for it.
    """

    model_config = {"extra": "ignore"}

    path: str
    basename: str | None = None
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    inline_tags: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    created: Any = Field(..., description="datetime, epoch-ms or ISO string")
    modified: Any = Field(..., description="datetime, epoch-ms or ISO string")
    content: str | None = None


class VaultSnapshot(BaseModel):
    """Normalized notes and their tasks at one point in time."""

    model_config = ConfigDict(frozen=True)

    notes: list[NoteRecord] = Field(default_factory=list)
    tasks: list[TaskRecord] = Field(default_factory=list)
    collected_at: datetime

    def tasks_for(self, path: str) -> list[TaskRecord]:
        return [task for task in self.tasks if task.file_path == path]
