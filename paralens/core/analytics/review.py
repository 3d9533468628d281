"""Review cadence health scoring per PARA location."""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import datetime

import numpy as np

from paralens.config import ReviewConfig
from paralens.core.intervals import resolve_target_days
from paralens.models.analytics import OverdueNote, ReviewLocationStat, ReviewReport
from paralens.models.location import REVIEWABLE_LOCATIONS, Location
from paralens.models.note import NoteRecord
from paralens.utils.timeutil import days_between


def health_score(avg_target_days: float, avg_days_since_touch: float) -> float:
    """
    Score how well a location keeps to its cadence.

    1.0 means touched on (or ahead of) cadence, 0.5 twice as slowly as target.
    Never exceeds 1.0.
    """
    if avg_days_since_touch <= 0:
        return 1.0
    return max(0.0, min(1.0, avg_target_days / avg_days_since_touch))


class ReviewCadenceScorer:
    """Scores staleness of inbox, projects, areas and resources."""

    def __init__(self, config: ReviewConfig | None = None):
        """
        Initialize scorer.

        Args:
            config: Per-location default cadences (defaults when omitted)
        """
        self.config = config or ReviewConfig()

    @property
    def default_intervals(self) -> Mapping[Location, float]:
        return self.config.default_intervals

    def score(self, notes: Iterable[NoteRecord], now: datetime) -> ReviewReport:
        """
        Compute review health for every non-archive location with notes.

        Args:
            notes: Note collection
            now: Reference time

        Returns:
            ReviewReport with per-location stats and a global overdue list
        """
        by_location: dict[Location, list[NoteRecord]] = defaultdict(list)
        for note in notes:
            if note.location in REVIEWABLE_LOCATIONS:
                by_location[note.location].append(note)

        stats: list[ReviewLocationStat] = []
        overdue: list[OverdueNote] = []

        for location in REVIEWABLE_LOCATIONS:
            members = by_location.get(location)
            if not members:
                continue

            touches: list[float] = []
            targets: list[float] = []
            overdue_count = 0

            for note in members:
                since_touch = days_between(note.modified_at, now)
                target = resolve_target_days(
                    location, note.review_interval_days, self.default_intervals
                )
                touches.append(since_touch)
                if target is None:
                    continue
                targets.append(target)
                if since_touch > target:
                    overdue_count += 1
                    overdue.append(
                        OverdueNote(
                            path=note.path,
                            basename=note.basename,
                            location=location,
                            days_since_touch=since_touch,
                            target_days=target,
                            days_overdue=since_touch - target,
                        )
                    )

            avg_touch = float(np.mean(touches))
            avg_target = float(np.mean(targets)) if targets else 0.0

            stats.append(
                ReviewLocationStat(
                    location=location,
                    avg_days_since_touch=avg_touch,
                    avg_target_days=avg_target,
                    health_score=health_score(avg_target, avg_touch),
                    overdue_count=overdue_count,
                    note_count=len(members),
                    last_touched_at=max(note.modified_at for note in members),
                )
            )

        overdue.sort(key=lambda item: (-item.days_overdue, item.path))

        overall = float(np.mean([stat.health_score for stat in stats])) if stats else None
        stalest = max(stats, key=lambda stat: stat.avg_days_since_touch) if stats else None
        freshest = min(stats, key=lambda stat: stat.avg_days_since_touch) if stats else None

        return ReviewReport(
            locations=stats,
            overdue=overdue,
            overall_health=overall,
            stalest_location=stalest.location if stalest else None,
            freshest_location=freshest.location if freshest else None,
        )
