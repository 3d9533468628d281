"""
Task record model.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from paralens.models.location import Location


class TaskRecord(BaseModel):
    """
    One checklist item extracted from a note.

    Rebuilt from scratch on every scan; never mutated.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(..., description="Path of the note containing the task")
    file_name: str = Field(default="", description="Basename of the note")
    location: Location = Field(default=Location.UNKNOWN, description="Location of the note")
    line_number: int = Field(..., ge=1, description="1-based line number")

    text: str = Field(..., description="Task text with marker glyphs stripped")
    completed: bool = Field(default=False)

    completion_date: date | None = Field(default=None, description="✅ date")
    due_date: date | None = Field(default=None, description="📅 date")
    created_date: date | None = Field(default=None, description="➕ date")
    age_in_days: int | None = Field(
        default=None,
        description="Days from creation to completion (completed tasks with both dates only)",
    )

    @property
    def is_open(self) -> bool:
        return not self.completed
