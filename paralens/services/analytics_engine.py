"""
Unified analytics engine - runs every analytics component over a snapshot.

Brings together:
- Flow estimation (history-backed or heuristic)
- Pipeline timeline reconstruction
- Review cadence scoring
- Task calendar, task analytics
- Activity heatmaps, vault statistics and the recent link graph
"""

import time
from datetime import datetime, timedelta

from paralens.config import Config
from paralens.core.analytics import (
    ActivityAnalyzer,
    FlowEstimator,
    PipelineReconstructor,
    ReviewCadenceScorer,
    TaskAnalyzer,
    TaskCalendarBuilder,
)
from paralens.models.analytics import (
    ActivityHeatmap,
    FlowResult,
    LinkGraph,
    PipelineTimeline,
    ReviewReport,
    TaskAnalytics,
    TaskCalendar,
    VaultReport,
    VaultStats,
)
from paralens.models.snapshot import VaultSnapshot
from paralens.utils.exceptions import ValidationError
from paralens.utils.logger import get_logger
from paralens.utils.timeutil import ensure_aware, local_date, zone_of

logger = get_logger(__name__)


class ParaAnalyticsEngine:
    """
    Facade over the analytics components.

    Stateless between calls: each method takes the full snapshot and an
    explicit `now`, and returns a freshly built result.
    """

    def __init__(self, config: Config | None = None):
        """
        Initialize engine.

        Args:
            config: Configuration object (defaults when omitted)
        """
        self.config = config or Config()
        self.flow_estimator = FlowEstimator(self.config.flow)
        self.pipeline_reconstructor = PipelineReconstructor()
        self.review_scorer = ReviewCadenceScorer(self.config.review)
        self.calendar_builder = TaskCalendarBuilder(self.config.calendar)
        self.task_analyzer = TaskAnalyzer()
        self.activity_analyzer = ActivityAnalyzer(self.config.activity)

    def flows(
        self, snapshot: VaultSnapshot, now: datetime, window_days: int | None = None
    ) -> FlowResult:
        """
        Estimate flows for notes created within the window.

        Args:
            snapshot: Vault snapshot
            now: Reference time
            window_days: Creation-date window (config default; None in config = all time)
        """
        now = ensure_aware(now)
        window = window_days if window_days is not None else self.config.flow.window_days
        if window is not None and window <= 0:
            raise ValidationError("Flow window must be positive", context={"window_days": window})
        notes = snapshot.notes
        if window is not None:
            cutoff = now - timedelta(days=window)
            notes = [note for note in notes if note.created_at >= cutoff]
        return self.flow_estimator.estimate(notes, now)

    def pipeline(
        self, snapshot: VaultSnapshot, now: datetime, window_days: int | None = None
    ) -> PipelineTimeline:
        window = window_days if window_days is not None else self.config.pipeline.window_days
        return self.pipeline_reconstructor.reconstruct(snapshot.notes, window, ensure_aware(now))

    def review(self, snapshot: VaultSnapshot, now: datetime) -> ReviewReport:
        return self.review_scorer.score(snapshot.notes, ensure_aware(now))

    def calendar(self, snapshot: VaultSnapshot, now: datetime) -> TaskCalendar:
        now = ensure_aware(now)
        return self.calendar_builder.build(snapshot.tasks, local_date(now, zone_of(now)))

    def task_analytics(self, snapshot: VaultSnapshot, now: datetime) -> TaskAnalytics:
        now = ensure_aware(now)
        return self.task_analyzer.analyze(
            snapshot.tasks, local_date(now, zone_of(now)), self.config.activity.window_days
        )

    def activity(self, snapshot: VaultSnapshot, now: datetime) -> ActivityHeatmap:
        return self.activity_analyzer.heatmap(snapshot.notes, ensure_aware(now))

    def stats(self, snapshot: VaultSnapshot, now: datetime) -> VaultStats:
        return self.activity_analyzer.stats(snapshot.notes, ensure_aware(now))

    def link_graph(self, snapshot: VaultSnapshot, now: datetime) -> LinkGraph:
        return self.activity_analyzer.link_graph(snapshot.notes, ensure_aware(now))

    def analyze(self, snapshot: VaultSnapshot, now: datetime | None = None) -> VaultReport:
        """
        Run every component.

        Args:
            snapshot: Vault snapshot
            now: Reference time (defaults to the snapshot's collection time)

        Returns:
            VaultReport
        """
        now = ensure_aware(now or snapshot.collected_at)
        log = logger.bind(operation="analyze")
        log.info(f"Analyzing snapshot: {len(snapshot.notes)} notes, {len(snapshot.tasks)} tasks")

        timings: dict[str, float] = {}
        results = {}
        for name, component in (
            ("flows", self.flows),
            ("pipeline", self.pipeline),
            ("review", self.review),
            ("calendar", self.calendar),
            ("tasks", self.task_analytics),
            ("activity", self.activity),
            ("stats", self.stats),
            ("link_graph", self.link_graph),
        ):
            start = time.time()
            results[name] = component(snapshot, now)
            timings[name] = (time.time() - start) * 1000

        log.info(
            "Analysis complete: "
            + ", ".join(f"{name}={elapsed:.1f}ms" for name, elapsed in timings.items())
        )

        return VaultReport(generated_at=now, **results)
