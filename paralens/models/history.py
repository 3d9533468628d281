"""
Location history model.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from paralens.models.location import Location, transition_key


class HistoryEntry(BaseModel):
    """
    A recorded move of a note between PARA locations.

    Raw frontmatter is normalized into this shape before any analytics run
    (see paralens.core.history.normalize_history).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: Location = Field(..., alias="from", description="Location the note left")
    to: Location = Field(..., description="Location the note entered")
    timestamp: datetime = Field(..., description="When the move happened (aware)")

    @property
    def key(self) -> str:
        """Transition key such as 'inbox->projects'."""
        return transition_key(self.from_, self.to)
