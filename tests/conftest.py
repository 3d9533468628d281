"""Shared fixtures.

All tests use a fixed reference time so day arithmetic is deterministic.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from paralens.config import Config
from paralens.models import NoteRecord

# Wednesday noon UTC
NOW = datetime(2024, 6, 12, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time (Wednesday 2024-06-12 12:00 UTC)."""
    return NOW


@pytest.fixture
def config() -> Config:
    """Default configuration."""
    return Config()


@pytest.fixture
def make_note(now) -> Callable[..., NoteRecord]:
    """
    Factory for notes with ages given in days relative to `now`.

    Usage:
        make_note("projects", created_days_ago=100, modified_days_ago=40)
    """
    counter = {"n": 0}

    def _make(
        location: str = "inbox",
        created_days_ago: float = 10,
        modified_days_ago: float = 0,
        history: list[dict[str, Any]] | None = None,
        path: str | None = None,
        **kwargs: Any,
    ) -> NoteRecord:
        counter["n"] += 1
        return NoteRecord(
            path=path or f"notes/note-{counter['n']}.md",
            location=location,
            history=history or [],
            created_at=now - timedelta(days=created_days_ago),
            modified_at=now - timedelta(days=modified_days_ago),
            **kwargs,
        )

    return _make
