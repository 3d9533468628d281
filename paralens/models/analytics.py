"""
Analytics result models.

Every analytics component returns a freshly built, frozen result. Results are
plain data: the host decides how to render them.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from paralens.models.location import Location
from paralens.models.task import TaskRecord

_FROZEN = ConfigDict(frozen=True)


# Flow estimation


class FlowResult(BaseModel):
    """
    Transition counts between PARA locations.

    `active_projects`/`archived_notes` count the current snapshot. The
    heuristic credits count the same notes a second time, from inside the
    no-history estimate; the two are kept apart on purpose.
    """

    model_config = _FROZEN

    flows: dict[str, int] = Field(..., description="Canonical transition key -> count")
    active_projects: int = 0
    archived_notes: int = 0
    heuristic_project_credits: int = Field(
        default=0, description="No-history notes in projects credited by the estimate"
    )
    heuristic_archive_credits: int = Field(
        default=0, description="No-history notes in archive credited by the estimate"
    )
    avg_project_duration_days: float = 0.0
    history_backed_count: int = 0
    heuristic_count: int = 0

    @property
    def total_flow(self) -> int:
        return sum(self.flows.values())

    @property
    def history_coverage(self) -> float:
        """Share (0-1) of notes whose flows come from recorded history."""
        total = self.history_backed_count + self.heuristic_count
        return self.history_backed_count / total if total else 0.0


# Pipeline reconstruction


class PipelineDay(BaseModel):
    """Census of note locations on one calendar day."""

    model_config = _FROZEN

    date: date
    counts_by_location: dict[Location, int]
    total: int
    dominant_location: Location | None = None


class PipelineTimeline(BaseModel):
    """Reconstructed per-day census plus stage-duration summary."""

    model_config = _FROZEN

    days: list[PipelineDay] = Field(default_factory=list)
    avg_stage_duration_days: dict[Location, float] = Field(default_factory=dict)
    longest_stage: Location | None = None
    busiest_day: PipelineDay | None = None
    transition_counts: dict[str, int] = Field(default_factory=dict)
    top_transition: str | None = None
    top_transition_count: int = 0


# Review cadence


class ReviewLocationStat(BaseModel):
    """Staleness and health of one location."""

    model_config = _FROZEN

    location: Location
    avg_days_since_touch: float
    avg_target_days: float
    health_score: float = Field(..., ge=0.0, le=1.0)
    overdue_count: int
    note_count: int
    last_touched_at: datetime | None = None


class OverdueNote(BaseModel):
    """A note touched less often than its review cadence."""

    model_config = _FROZEN

    path: str
    basename: str
    location: Location
    days_since_touch: float
    target_days: float
    days_overdue: float


class ReviewReport(BaseModel):
    """Review cadence health across locations."""

    model_config = _FROZEN

    locations: list[ReviewLocationStat] = Field(default_factory=list)
    overdue: list[OverdueNote] = Field(default_factory=list)
    overall_health: float | None = None
    stalest_location: Location | None = None
    freshest_location: Location | None = None

    @property
    def overall_health_percent(self) -> int | None:
        if self.overall_health is None:
            return None
        return round(self.overall_health * 100)


# Task calendar


class CalendarCell(BaseModel):
    """One day of the due-date grid."""

    model_config = _FROZEN

    date: date
    tasks: list[TaskRecord] = Field(default_factory=list)
    counts_by_location: dict[Location, int] = Field(default_factory=dict)
    is_today: bool = False
    is_past: bool = False


class TaskCalendar(BaseModel):
    """Fixed day grid of due-dated tasks starting on a Monday."""

    model_config = _FROZEN

    start_date: date
    today: date
    cells: list[CalendarCell]
    overdue: list[TaskRecord] = Field(default_factory=list)
    due_next_7_days: int = Field(default=0, description="Open tasks due in the look-ahead window")
    busiest_cell: CalendarCell | None = None
    totals_by_location: dict[Location, int] = Field(default_factory=dict)


# Task analytics


class TaskCounts(BaseModel):
    model_config = _FROZEN

    open: int = 0
    completed: int = 0


class DailyCount(BaseModel):
    model_config = _FROZEN

    date: date
    count: int


class TaskAgeStats(BaseModel):
    """Days from creation to completion across completed tasks."""

    model_config = _FROZEN

    sample_count: int
    avg_days: int
    min_days: int
    max_days: int
    median_days: int


class TaskAnalytics(BaseModel):
    """Completion metrics over every extracted task."""

    model_config = _FROZEN

    total: int = 0
    completed: int = 0
    open: int = 0
    completion_rate: float = Field(default=0.0, description="Percent, one decimal")
    tracked_completions: int = Field(default=0, description="Completed tasks with a ✅ date")
    tracking_coverage: float = Field(default=0.0, description="Percent of completed tasks tracked")
    by_location: dict[Location, TaskCounts] = Field(default_factory=dict)
    completions_by_date: dict[date, list[TaskRecord]] = Field(default_factory=dict)
    velocity: list[DailyCount] = Field(default_factory=list)
    age: TaskAgeStats | None = None


# Activity and vault statistics


class HeatmapDay(BaseModel):
    model_config = _FROZEN

    date: date
    count: int
    level: int
    notes: list[str] = Field(default_factory=list, description="Basenames modified that day")


class LocationHeatmap(BaseModel):
    """Modification activity of one location."""

    model_config = _FROZEN

    location: Location
    note_count: int
    max_count: int
    days: list[HeatmapDay]


class ActivityHeatmap(BaseModel):
    model_config = _FROZEN

    window_days: int
    locations: list[LocationHeatmap] = Field(default_factory=list)


class LocationShare(BaseModel):
    model_config = _FROZEN

    location: Location
    count: int
    percentage: float


class TagCount(BaseModel):
    model_config = _FROZEN

    tag: str
    count: int


class TagCloudItem(BaseModel):
    model_config = _FROZEN

    tag: str
    count: int
    recent_count: int
    weight: float = Field(..., gt=0.0, le=1.0, description="count relative to the top tag")


class VaultStats(BaseModel):
    """Vault-wide counts."""

    model_config = _FROZEN

    total_notes: int = 0
    unique_tags: int = 0
    total_links: int = 0
    avg_links_per_note: float = 0.0
    distribution: list[LocationShare] = Field(default_factory=list)
    recent_activity: dict[int, int] = Field(
        default_factory=dict, description="Period in days -> notes modified within it"
    )
    top_tags: list[TagCount] = Field(default_factory=list)
    tag_cloud: list[TagCloudItem] = Field(default_factory=list)


class LinkNode(BaseModel):
    """A recently modified note in the link graph."""

    model_config = _FROZEN

    path: str
    basename: str
    location: Location
    link_count: int = Field(default=0, description="Outgoing wiki links, resolved or not")


class LinkEdge(BaseModel):
    model_config = _FROZEN

    source: str = Field(..., description="Path of the linking note")
    target: str = Field(..., description="Path of the linked note")


class LinkGraph(BaseModel):
    """Wiki links between notes modified within the window."""

    model_config = _FROZEN

    window_days: int
    nodes: list[LinkNode] = Field(default_factory=list)
    edges: list[LinkEdge] = Field(default_factory=list)


class VaultReport(BaseModel):
    """Every analytics result for one snapshot."""

    model_config = _FROZEN

    generated_at: datetime
    flows: FlowResult
    pipeline: PipelineTimeline
    review: ReviewReport
    calendar: TaskCalendar
    tasks: TaskAnalytics
    activity: ActivityHeatmap
    stats: VaultStats
    link_graph: LinkGraph
