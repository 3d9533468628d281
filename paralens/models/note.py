"""
Note record model.

A NoteRecord is the immutable view of one vault note that every analytics
component consumes. Raw metadata is normalized by the field validators, so a
record built from hand-edited frontmatter is always well-typed.
"""

from datetime import datetime
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from paralens.core.history import normalize_history
from paralens.core.intervals import resolve_interval
from paralens.models.history import HistoryEntry
from paralens.models.location import Location
from paralens.utils.timeutil import to_datetime


class NoteRecord(BaseModel):
    """
    A vault note with its PARA location and movement history.

    Owned by the host; analytics treat it as read-only input.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    path: str = Field(..., description="Vault-relative path")
    basename: str = Field(default="", description="File name without extension")

    # PARA state
    location: Location = Field(default=Location.UNKNOWN, description="Current location")
    history: list[HistoryEntry] = Field(
        default_factory=list,
        description="Location moves, sorted ascending by timestamp",
    )

    # Metadata
    tags: frozenset[str] = Field(default_factory=frozenset, description="Frontmatter + inline tags")
    links: list[str] = Field(default_factory=list, description="Outgoing wiki link targets")
    review_interval_days: float | None = Field(
        default=None,
        description="Note-level review cadence in days (None = location default)",
    )

    # Timestamps
    created_at: datetime = Field(..., description="Creation timestamp")
    modified_at: datetime = Field(..., description="Last modification timestamp")

    @field_validator("location", mode="before")
    @classmethod
    def _parse_location(cls, value: Any) -> Location:
        return Location.parse(value)

    @field_validator("history", mode="before")
    @classmethod
    def _normalize_history(cls, value: Any) -> list[HistoryEntry]:
        return normalize_history(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(str(tag).lstrip("#").strip() for tag in value if str(tag).strip("# "))

    @field_validator("review_interval_days", mode="before")
    @classmethod
    def _resolve_interval(cls, value: Any) -> float | None:
        return resolve_interval(value)

    @field_validator("created_at", "modified_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> datetime:
        parsed = to_datetime(value)
        if parsed is None:
            raise ValueError(f"Unparseable timestamp: {value!r}")
        return parsed

    @model_validator(mode="before")
    @classmethod
    def _default_basename(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("basename") and data.get("path"):
            data = {**data, "basename": PurePosixPath(str(data["path"])).stem}
        return data

    @property
    def has_history(self) -> bool:
        """True when the note carries at least one usable history entry."""
        return bool(self.history)
