"""Due-date task calendar."""

from collections import Counter
from collections.abc import Iterable
from datetime import date, timedelta

from paralens.config import CalendarConfig
from paralens.models.analytics import CalendarCell, TaskCalendar
from paralens.models.task import TaskRecord
from paralens.utils.timeutil import week_start


def cell_order(task: TaskRecord) -> tuple[bool, str]:
    """Open tasks first, then alphabetical by text."""
    return (task.completed, task.text.lower())


class TaskCalendarBuilder:
    """Places due-dated tasks on a fixed grid starting on this week's Monday."""

    def __init__(self, config: CalendarConfig | None = None):
        self.config = config or CalendarConfig()

    def build(self, tasks: Iterable[TaskRecord], today: date) -> TaskCalendar:
        """
        Build the calendar grid.

        Args:
            tasks: Extracted tasks; tasks without a due date are skipped
            today: Local calendar date

        Returns:
            TaskCalendar with `grid_days` cells
        """
        start = week_start(today)
        end = start + timedelta(days=self.config.grid_days)
        lookahead_end = today + timedelta(days=self.config.lookahead_days)

        by_day: dict[date, list[TaskRecord]] = {
            start + timedelta(days=offset): [] for offset in range(self.config.grid_days)
        }
        overdue: list[TaskRecord] = []
        due_soon = 0

        for task in tasks:
            due = task.due_date
            if due is None:
                continue
            if start <= due < end:
                by_day[due].append(task)
            if task.completed:
                continue
            if due < today:
                overdue.append(task)
            elif due < lookahead_end:
                due_soon += 1

        cells = []
        totals: Counter = Counter()
        for day, day_tasks in by_day.items():
            ordered = sorted(day_tasks, key=cell_order)
            counts = Counter(task.location for task in ordered)
            totals.update(counts)
            cells.append(
                CalendarCell(
                    date=day,
                    tasks=ordered,
                    counts_by_location=dict(counts),
                    is_today=day == today,
                    is_past=day < today,
                )
            )

        busiest = max(cells, key=lambda cell: len(cell.tasks)) if cells else None
        if busiest is not None and not busiest.tasks:
            busiest = None

        return TaskCalendar(
            start_date=start,
            today=today,
            cells=cells,
            overdue=sorted(overdue, key=lambda task: (task.due_date, task.text.lower())),
            due_next_7_days=due_soon,
            busiest_cell=busiest,
            totals_by_location=dict(totals),
        )
