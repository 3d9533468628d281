"""
Boundary normalization of raw location history.

Frontmatter history arrays are hand-edited and come in several dialects:
timestamps under `timestamp`, `time` or `date`, and location fields under
`from`/`from_location`/`fromLocation` (likewise for `to`). Everything is
resolved to HistoryEntry here; entries without a usable timestamp are dropped.
"""

from collections.abc import Mapping
from typing import Any

from paralens.models.history import HistoryEntry
from paralens.models.location import Location
from paralens.utils.timeutil import to_datetime

FROM_FIELDS = ("from", "from_location", "fromLocation")
TO_FIELDS = ("to", "to_location", "toLocation")
TIME_FIELDS = ("timestamp", "time", "date")


def _first_present(raw: Mapping[str, Any], fields: tuple[str, ...]) -> Any:
    for field in fields:
        value = raw.get(field)
        if value is not None and value != "":
            return value
    return None


def normalize_entry(raw: Any) -> HistoryEntry | None:
    """
    Normalize one raw history item.

    Args:
        raw: History item as found in metadata

    Returns:
        HistoryEntry, or None when the item is not a mapping or has no
        derivable timestamp
    """
    if isinstance(raw, HistoryEntry):
        return raw
    if not isinstance(raw, Mapping):
        return None

    # Fall through the time fields: a bad `timestamp` may still have a good `date`
    timestamp = None
    for field in TIME_FIELDS:
        timestamp = to_datetime(raw.get(field))
        if timestamp is not None:
            break
    if timestamp is None:
        return None

    return HistoryEntry(
        from_=Location.parse(_first_present(raw, FROM_FIELDS)),
        to=Location.parse(_first_present(raw, TO_FIELDS)),
        timestamp=timestamp,
    )


def normalize_history(raw: Any) -> list[HistoryEntry]:
    """
    Normalize a raw history array into chronologically sorted entries.

    Args:
        raw: Value of the history metadata field (any type)

    Returns:
        Entries sorted ascending by timestamp; [] for non-list input
    """
    if not isinstance(raw, list | tuple):
        return []
    entries = [entry for entry in (normalize_entry(item) for item in raw) if entry is not None]
    return sorted(entries, key=lambda entry: entry.timestamp)
