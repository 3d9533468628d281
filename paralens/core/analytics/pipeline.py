"""
Pipeline timeline reconstruction.

Replays each note's location history to answer "where was every note on day
D?" for a window of days ending today, and measures how long notes stay in
each stage before moving on.
"""

from bisect import bisect_right
from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import datetime

import numpy as np

from paralens.models.analytics import PipelineDay, PipelineTimeline
from paralens.models.location import Location, transition_key
from paralens.models.note import NoteRecord
from paralens.utils.timeutil import day_midpoint, days_between, local_date, window_dates, zone_of

State = tuple[datetime, Location]


def build_states(note: NoteRecord) -> list[State]:
    """
    Ordered (timestamp, location) states of a note.

    The first state is the creation time, placed in the `from` of the earliest
    history entry, or the current location when there is no history. A
    creation time later than the first recorded move (file ctime reset by a
    sync) is clamped to that move.
    """
    history = sorted(note.history, key=lambda entry: entry.timestamp)
    if not history:
        return [(note.created_at, note.location)]
    states = [(min(note.created_at, history[0].timestamp), history[0].from_)]
    states.extend((entry.timestamp, entry.to) for entry in history)
    return states


def location_at(states: list[State], instant: datetime) -> Location | None:
    """Location in effect at `instant`, or None before the first state."""
    index = bisect_right([timestamp for timestamp, _ in states], instant)
    if index == 0:
        return None
    return states[index - 1][1]


def dominant_location(counts: dict[Location, int]) -> Location | None:
    """Location with the highest count; first encountered wins ties."""
    best: Location | None = None
    best_count = 0
    for location, count in counts.items():
        if count > best_count:
            best, best_count = location, count
    return best


class PipelineReconstructor:
    """Rebuilds per-day location census and stage durations from history."""

    def reconstruct(
        self, notes: Iterable[NoteRecord], window_days: int, now: datetime
    ) -> PipelineTimeline:
        """
        Reconstruct the pipeline over a window ending today.

        Args:
            notes: Full note collection
            window_days: Number of days in the window (today included)
            now: Reference time; its timezone defines calendar days

        Returns:
            PipelineTimeline with one PipelineDay per window day
        """
        tz = zone_of(now)
        dates = window_dates(local_date(now, tz), window_days)
        samples = [day_midpoint(day, tz) for day in dates]

        daily: list[Counter[Location]] = [Counter() for _ in dates]
        stage_samples: dict[Location, list[float]] = defaultdict(list)
        transitions: Counter[str] = Counter()

        for note in notes:
            states = build_states(note)

            for index, sample in enumerate(samples):
                location = location_at(states, sample)
                if location is not None:
                    daily[index][location] += 1

            for (started, previous), (moved, current) in zip(states, states[1:]):
                stage_samples[previous].append(days_between(started, moved))
                transitions[transition_key(previous, current)] += 1

        days = [self._census_day(day, counts) for day, counts in zip(dates, daily)]

        avg_stage = {
            location: float(np.mean(values)) for location, values in stage_samples.items() if values
        }
        longest_stage = max(avg_stage, key=avg_stage.get) if avg_stage else None

        busiest_day = max(days, key=lambda day: day.total) if days else None
        if busiest_day is not None and busiest_day.total == 0:
            busiest_day = None

        top_transition = None
        top_count = 0
        if transitions:
            top_transition, top_count = max(transitions.items(), key=lambda item: item[1])

        return PipelineTimeline(
            days=days,
            avg_stage_duration_days=avg_stage,
            longest_stage=longest_stage,
            busiest_day=busiest_day,
            transition_counts=dict(transitions),
            top_transition=top_transition,
            top_transition_count=top_count,
        )

    @staticmethod
    def _census_day(day, counts: Counter[Location]) -> PipelineDay:
        by_location = {location: counts.get(location, 0) for location in Location}
        return PipelineDay(
            date=day,
            counts_by_location=by_location,
            total=sum(by_location.values()),
            dominant_location=dominant_location(by_location),
        )
