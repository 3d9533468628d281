"""
Activity heatmaps, vault-wide statistics and the recent link graph.

Heatmap levels scale each day's modification count against the busiest day
of the same location, so every location uses its full colour range.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from paralens.config import ActivityConfig
from paralens.models.analytics import (
    ActivityHeatmap,
    HeatmapDay,
    LinkEdge,
    LinkGraph,
    LinkNode,
    LocationHeatmap,
    LocationShare,
    TagCloudItem,
    TagCount,
    VaultStats,
)
from paralens.models.location import PARA_LOCATIONS, Location
from paralens.models.note import NoteRecord
from paralens.utils.timeutil import local_date, window_dates, zone_of


def heat_level(count: int, max_count: int, levels: int) -> int:
    """Bucket a count into 0..levels relative to the maximum."""
    return min(levels, int(count / max(max_count, 1) * levels))


class ActivityAnalyzer:
    """Builds per-location heatmaps and vault statistics."""

    def __init__(self, config: ActivityConfig | None = None):
        self.config = config or ActivityConfig()

    def heatmap(self, notes: Iterable[NoteRecord], now: datetime) -> ActivityHeatmap:
        """
        Modification activity per location over the configured window.

        Locations without notes are left out.
        """
        tz = zone_of(now)
        dates = window_dates(local_date(now, tz), self.config.window_days)
        cutoff = now - timedelta(days=self.config.window_days)

        grouped: dict[Location, list[NoteRecord]] = defaultdict(list)
        for note in notes:
            if note.location in PARA_LOCATIONS:
                grouped[note.location].append(note)

        heatmaps = []
        for location in PARA_LOCATIONS:
            members = grouped.get(location)
            if not members:
                continue

            per_day: dict[date, list[str]] = defaultdict(list)
            for note in members:
                if note.modified_at >= cutoff:
                    per_day[local_date(note.modified_at, tz)].append(note.basename)

            max_count = max((len(names) for names in per_day.values()), default=0)
            days = [
                HeatmapDay(
                    date=day,
                    count=len(per_day.get(day, [])),
                    level=heat_level(len(per_day.get(day, [])), max_count, self.config.heatmap_levels),
                    notes=per_day.get(day, []),
                )
                for day in dates
            ]
            heatmaps.append(
                LocationHeatmap(
                    location=location,
                    note_count=len(members),
                    max_count=max_count,
                    days=days,
                )
            )

        return ActivityHeatmap(window_days=self.config.window_days, locations=heatmaps)

    def stats(self, notes: Iterable[NoteRecord], now: datetime) -> VaultStats:
        """Distribution, recent activity and tag rankings for the vault."""
        notes = list(notes)
        total = len(notes)

        tag_counts: Counter[str] = Counter()
        recent_tag_counts: Counter[str] = Counter()
        cutoff = now - timedelta(days=self.config.window_days)
        for note in notes:
            tag_counts.update(note.tags)
            if note.modified_at >= cutoff:
                recent_tag_counts.update(note.tags)

        total_links = sum(len(note.links) for note in notes)
        location_counts = Counter(note.location for note in notes)

        distribution = [
            LocationShare(
                location=location,
                count=location_counts.get(location, 0),
                percentage=round(location_counts.get(location, 0) / total * 100, 1) if total else 0.0,
            )
            for location in PARA_LOCATIONS
        ]

        recent_activity = {
            period: sum(1 for note in notes if note.modified_at >= now - timedelta(days=period))
            for period in self.config.recent_periods
        }

        ranked = sorted(tag_counts.items(), key=lambda item: (-item[1], item[0]))

        return VaultStats(
            total_notes=total,
            unique_tags=len(tag_counts),
            total_links=total_links,
            avg_links_per_note=round(total_links / total, 1) if total else 0.0,
            distribution=distribution,
            recent_activity=recent_activity,
            top_tags=[TagCount(tag=tag, count=count) for tag, count in ranked[: self.config.top_tags]],
            tag_cloud=self._tag_cloud(ranked, recent_tag_counts),
        )

    def _tag_cloud(
        self, ranked: list[tuple[str, int]], recent: Counter[str]
    ) -> list[TagCloudItem]:
        system_tags = {tag.lower() for tag in self.config.system_tags}
        candidates = [
            (tag, count)
            for tag, count in ranked
            if tag.lower() not in system_tags and recent.get(tag, 0) > 0
        ][: self.config.tag_cloud_limit]
        if not candidates:
            return []

        top = candidates[0][1]
        return [
            TagCloudItem(tag=tag, count=count, recent_count=recent[tag], weight=count / top)
            for tag, count in candidates
        ]

    def link_graph(self, notes: Iterable[NoteRecord], now: datetime) -> LinkGraph:
        """
        Wiki links among notes modified within the configured window.

        A link target matches a note by path, by path without the `.md`
        extension, or by basename (first path in sort order wins). An edge needs
        both ends inside the window; self links and repeats are dropped.
        """
        cutoff = now - timedelta(days=self.config.window_days)
        recent = sorted(
            (note for note in notes if note.modified_at >= cutoff), key=lambda note: note.path
        )

        by_name: dict[str, str] = {}
        for note in recent:
            by_name.setdefault(note.path, note.path)
            if note.path.endswith(".md"):
                by_name.setdefault(note.path[: -len(".md")], note.path)
        for note in recent:
            by_name.setdefault(note.basename, note.path)

        edges: dict[tuple[str, str], LinkEdge] = {}
        for note in recent:
            for link in note.links:
                target = by_name.get(link)
                if target is None or target == note.path:
                    continue
                edges.setdefault((note.path, target), LinkEdge(source=note.path, target=target))

        return LinkGraph(
            window_days=self.config.window_days,
            nodes=[
                LinkNode(
                    path=note.path,
                    basename=note.basename,
                    location=note.location,
                    link_count=len(note.links),
                )
                for note in recent
            ],
            edges=list(edges.values()),
        )
