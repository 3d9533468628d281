"""
Data models for ParaLens.

Input layer:
- Location: PARA bucket enum, transition keys
- HistoryEntry: a recorded location move
- NoteRecord: normalized vault note
- TaskRecord: checklist item extracted from note content
- RawNote, VaultSnapshot: host-supplied notes and the normalized snapshot

Result layer (frozen):
- FlowResult, PipelineTimeline/PipelineDay, ReviewReport/ReviewLocationStat
- TaskCalendar/CalendarCell, TaskAnalytics, ActivityHeatmap, VaultStats
- LinkGraph/LinkNode/LinkEdge: wiki links among recently modified notes
- VaultReport: everything for one snapshot
"""

from paralens.models.analytics import (
    ActivityHeatmap,
    CalendarCell,
    DailyCount,
    FlowResult,
    HeatmapDay,
    LinkEdge,
    LinkGraph,
    LinkNode,
    LocationHeatmap,
    LocationShare,
    OverdueNote,
    PipelineDay,
    PipelineTimeline,
    ReviewLocationStat,
    ReviewReport,
    TagCloudItem,
    TagCount,
    TaskAgeStats,
    TaskAnalytics,
    TaskCalendar,
    TaskCounts,
    VaultReport,
    VaultStats,
)
from paralens.models.history import HistoryEntry
from paralens.models.location import (
    CANONICAL_FLOWS,
    PARA_LOCATIONS,
    REVIEWABLE_LOCATIONS,
    Location,
    transition_key,
)
from paralens.models.note import NoteRecord
from paralens.models.snapshot import RawNote, VaultSnapshot
from paralens.models.task import TaskRecord

__all__ = [
    # Input models
    "Location",
    "PARA_LOCATIONS",
    "REVIEWABLE_LOCATIONS",
    "CANONICAL_FLOWS",
    "transition_key",
    "HistoryEntry",
    "NoteRecord",
    "TaskRecord",
    "RawNote",
    "VaultSnapshot",
    # Result models
    "FlowResult",
    "PipelineDay",
    "PipelineTimeline",
    "ReviewLocationStat",
    "OverdueNote",
    "ReviewReport",
    "CalendarCell",
    "TaskCalendar",
    "TaskCounts",
    "DailyCount",
    "TaskAgeStats",
    "TaskAnalytics",
    "HeatmapDay",
    "LocationHeatmap",
    "ActivityHeatmap",
    "LocationShare",
    "TagCount",
    "TagCloudItem",
    "VaultStats",
    "LinkNode",
    "LinkEdge",
    "LinkGraph",
    "VaultReport",
]
