"""
PARA location model.
"""

from enum import Enum


class Location(str, Enum):
    """PARA buckets a note can live in."""

    INBOX = "inbox"
    PROJECTS = "projects"
    AREAS = "areas"
    RESOURCES = "resources"
    ARCHIVE = "archive"
    UNKNOWN = "unknown"  # Missing or unrecognized location tag

    @classmethod
    def parse(cls, value) -> "Location":
        """
        Parse a raw location value.

        Args:
            value: Location tag from metadata (any type)

        Returns:
            Matching Location, or UNKNOWN when the value is not canonical
        """
        if isinstance(value, Location):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


# The five real buckets, in display order
PARA_LOCATIONS: tuple[Location, ...] = (
    Location.INBOX,
    Location.PROJECTS,
    Location.AREAS,
    Location.RESOURCES,
    Location.ARCHIVE,
)

# Buckets with a review cadence
REVIEWABLE_LOCATIONS: tuple[Location, ...] = PARA_LOCATIONS[:4]


def transition_key(source: Location, target: Location) -> str:
    """Build a transition key such as 'inbox->projects'."""
    return f"{source.value}->{target.value}"


CANONICAL_FLOWS: tuple[str, ...] = (
    transition_key(Location.INBOX, Location.PROJECTS),
    transition_key(Location.INBOX, Location.AREAS),
    transition_key(Location.INBOX, Location.RESOURCES),
    transition_key(Location.PROJECTS, Location.ARCHIVE),
    transition_key(Location.AREAS, Location.ARCHIVE),
    transition_key(Location.RESOURCES, Location.ARCHIVE),
)
