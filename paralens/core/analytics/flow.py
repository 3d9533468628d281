"""Flow estimation between PARA locations, from history or by heuristic."""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime

import numpy as np

from paralens.config import FlowConfig
from paralens.models.analytics import FlowResult
from paralens.models.location import CANONICAL_FLOWS, Location, transition_key
from paralens.models.note import NoteRecord
from paralens.utils.logger import get_logger
from paralens.utils.timeutil import days_between

logger = get_logger(__name__, operation="flows")

INBOX_TO_PROJECTS = transition_key(Location.INBOX, Location.PROJECTS)
INBOX_TO_AREAS = transition_key(Location.INBOX, Location.AREAS)
INBOX_TO_RESOURCES = transition_key(Location.INBOX, Location.RESOURCES)
PROJECTS_TO_ARCHIVE = transition_key(Location.PROJECTS, Location.ARCHIVE)
AREAS_TO_ARCHIVE = transition_key(Location.AREAS, Location.ARCHIVE)
RESOURCES_TO_ARCHIVE = transition_key(Location.RESOURCES, Location.ARCHIVE)


class FlowEstimator:
    """
    Estimates how notes move through the PARA pipeline.

    Notes with recorded history contribute their real transitions. Notes
    without history fall back to an age/staleness heuristic keyed on their
    current location:
    - inbox: nothing has moved yet
    - projects/areas/resources: assumed to come from inbox; old and stale
      notes are assumed to be heading for archive
    - archive: origin guessed from age (young -> projects, middle -> areas,
      old -> resources)
    """

    def __init__(self, config: FlowConfig | None = None):
        """
        Initialize flow estimator.

        Args:
            config: Heuristic thresholds (defaults when omitted)
        """
        self.config = config or FlowConfig()

    def estimate(self, notes: Iterable[NoteRecord], now: datetime) -> FlowResult:
        """
        Compute flow counts for a set of notes.

        Args:
            notes: Notes to analyze (already restricted to the wanted window)
            now: Reference time for ages

        Returns:
            FlowResult with every canonical key present
        """
        flows: Counter[str] = Counter({key: 0 for key in CANONICAL_FLOWS})
        durations: list[float] = []
        history_backed = 0
        heuristic = 0
        project_credits = 0
        archive_credits = 0
        active_projects = 0
        archived_notes = 0

        for note in notes:
            if note.history:
                history_backed += 1
                durations.extend(self._history_flows(note, flows))
            else:
                heuristic += 1
                duration, credit = self._heuristic_flows(note, now, flows)
                if duration is not None:
                    durations.append(duration)
                if note.location is Location.PROJECTS:
                    project_credits += credit
                elif note.location is Location.ARCHIVE:
                    archive_credits += credit

            # Current snapshot, independent of the branch above
            if note.location is Location.PROJECTS:
                active_projects += 1
            elif note.location is Location.ARCHIVE:
                archived_notes += 1

        avg_duration = float(np.mean(durations)) if durations else 0.0

        logger.debug(
            f"Flow estimate: {history_backed} notes with history, {heuristic} estimated"
        )

        return FlowResult(
            flows=dict(flows),
            active_projects=active_projects,
            archived_notes=archived_notes,
            heuristic_project_credits=project_credits,
            heuristic_archive_credits=archive_credits,
            avg_project_duration_days=avg_duration,
            history_backed_count=history_backed,
            heuristic_count=heuristic,
        )

    def _history_flows(self, note: NoteRecord, flows: Counter[str]) -> list[float]:
        """Tally recorded transitions; return project duration samples."""
        durations = []
        for entry in note.history:
            if entry.key in flows:
                flows[entry.key] += 1
            if entry.key == PROJECTS_TO_ARCHIVE:
                duration = days_between(note.created_at, entry.timestamp)
                if duration > 0:
                    durations.append(duration)
        return durations

    def _heuristic_flows(
        self, note: NoteRecord, now: datetime, flows: Counter[str]
    ) -> tuple[float | None, int]:
        """
        Credit inferred transitions for a note without history.

        Returns:
            Tuple of (project duration sample or None, snapshot credit 0/1)
        """
        cfg = self.config
        age = days_between(note.created_at, now)
        stale = days_between(note.modified_at, now)

        match note.location:
            case Location.INBOX | Location.UNKNOWN:
                return None, 0
            case Location.PROJECTS:
                flows[INBOX_TO_PROJECTS] += 1
                if age > cfg.projects_archive_min_age and stale > cfg.projects_archive_min_stale:
                    flows[PROJECTS_TO_ARCHIVE] += 1
                return age, 1
            case Location.AREAS:
                flows[INBOX_TO_AREAS] += 1
                if age > cfg.areas_archive_min_age and stale > cfg.areas_archive_min_stale:
                    flows[AREAS_TO_ARCHIVE] += 1
                return None, 0
            case Location.RESOURCES:
                flows[INBOX_TO_RESOURCES] += 1
                if age > cfg.resources_archive_min_age and stale > cfg.resources_archive_min_stale:
                    flows[RESOURCES_TO_ARCHIVE] += 1
                return None, 0
            case Location.ARCHIVE:
                # Backward guess about origin, not a known fact
                if age < cfg.archive_from_projects_below:
                    flows[PROJECTS_TO_ARCHIVE] += 1
                elif age < cfg.archive_from_areas_below:
                    flows[AREAS_TO_ARCHIVE] += 1
                else:
                    flows[RESOURCES_TO_ARCHIVE] += 1
                return None, 1
