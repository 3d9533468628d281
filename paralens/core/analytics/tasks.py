"""Task completion analytics."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

import numpy as np

from paralens.models.analytics import DailyCount, TaskAgeStats, TaskAnalytics, TaskCounts
from paralens.models.location import PARA_LOCATIONS
from paralens.models.task import TaskRecord
from paralens.utils.timeutil import window_dates


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def age_stats(ages: list[int]) -> TaskAgeStats | None:
    """Summary of completion ages; the median is the upper middle value."""
    if not ages:
        return None
    ordered = sorted(ages)
    return TaskAgeStats(
        sample_count=len(ordered),
        avg_days=round(float(np.mean(ordered))),
        min_days=ordered[0],
        max_days=ordered[-1],
        median_days=ordered[len(ordered) // 2],
    )


class TaskAnalyzer:
    """Completion rate, tracking coverage, velocity and task age."""

    def analyze(self, tasks: Iterable[TaskRecord], today: date, window_days: int) -> TaskAnalytics:
        """
        Summarize extracted tasks.

        Args:
            tasks: Every extracted task
            today: Local calendar date closing the velocity window
            window_days: Length of the velocity series

        Returns:
            TaskAnalytics
        """
        tasks = list(tasks)
        completed = [task for task in tasks if task.completed]
        tracked = [task for task in completed if task.completion_date is not None]

        by_location = {location: {"open": 0, "completed": 0} for location in PARA_LOCATIONS}
        for task in tasks:
            if task.location in by_location:
                by_location[task.location]["completed" if task.completed else "open"] += 1

        completions: dict[date, list[TaskRecord]] = defaultdict(list)
        for task in tracked:
            completions[task.completion_date].append(task)

        velocity = [
            DailyCount(date=day, count=len(completions.get(day, [])))
            for day in window_dates(today, window_days)
        ]

        ages = [task.age_in_days for task in tasks if task.age_in_days is not None]

        return TaskAnalytics(
            total=len(tasks),
            completed=len(completed),
            open=len(tasks) - len(completed),
            completion_rate=_percent(len(completed), len(tasks)),
            tracked_completions=len(tracked),
            tracking_coverage=_percent(len(tracked), len(completed)),
            by_location={
                location: TaskCounts(**counts) for location, counts in by_location.items()
            },
            completions_by_date=dict(sorted(completions.items())),
            velocity=velocity,
            age=age_stats(ages),
        )
