"""
Tests for PipelineReconstructor.

The reference time is noon UTC, so each sampled day is read at the same
wall-clock time as `now`.
"""

from datetime import date, timedelta

import pytest

from paralens.core.analytics import PipelineReconstructor
from paralens.core.analytics.pipeline import build_states, dominant_location, location_at
from paralens.models import Location


@pytest.fixture
def reconstructor():
    return PipelineReconstructor()


class TestHelpers:
    def test_build_states_starts_with_history_origin(self, make_note, now):
        note = make_note(
            "projects",
            created_days_ago=10,
            history=[{"from": "inbox", "to": "projects", "timestamp": now - timedelta(days=3)}],
        )

        states = build_states(note)

        assert [location for _, location in states] == [Location.INBOX, Location.PROJECTS]
        assert states[0][0] == note.created_at

    def test_build_states_clamps_late_creation_time(self, make_note, now):
        moved_at = now - timedelta(days=10)
        note = make_note(
            "projects",
            created_days_ago=2,
            history=[{"from": "inbox", "to": "projects", "timestamp": moved_at}],
        )

        states = build_states(note)

        assert states == [(moved_at, Location.INBOX), (moved_at, Location.PROJECTS)]

    def test_late_creation_time_adds_no_reverse_transition(self, make_note, now):
        note = make_note(
            "projects",
            created_days_ago=2,
            history=[{"from": "inbox", "to": "projects", "timestamp": now - timedelta(days=10)}],
        )

        timeline = PipelineReconstructor().reconstruct([note], 14, now)

        assert timeline.transition_counts == {"inbox->projects": 1}
        assert timeline.days[-1].counts_by_location[Location.PROJECTS] == 1
        assert timeline.days[-1].counts_by_location[Location.INBOX] == 0

    def test_build_states_without_history(self, make_note):
        note = make_note("areas")

        assert [location for _, location in build_states(note)] == [Location.AREAS]

    def test_location_at(self, make_note, now):
        note = make_note(
            "projects",
            created_days_ago=10,
            history=[{"from": "inbox", "to": "projects", "timestamp": now - timedelta(days=3)}],
        )
        states = build_states(note)

        assert location_at(states, now - timedelta(days=11)) is None
        assert location_at(states, now - timedelta(days=5)) is Location.INBOX
        assert location_at(states, now - timedelta(days=3)) is Location.PROJECTS
        assert location_at(states, now) is Location.PROJECTS

    def test_dominant_location_first_wins_ties(self):
        counts = {Location.INBOX: 2, Location.PROJECTS: 2, Location.AREAS: 1}

        assert dominant_location(counts) is Location.INBOX

    def test_dominant_location_empty(self):
        assert dominant_location({location: 0 for location in Location}) is None


class TestReconstruct:
    def test_empty_vault(self, reconstructor, now):
        timeline = reconstructor.reconstruct([], 30, now)

        assert len(timeline.days) == 30
        assert all(day.total == 0 for day in timeline.days)
        assert timeline.days[-1].date == date(2024, 6, 12)
        assert timeline.days[0].date == date(2024, 5, 14)
        assert timeline.busiest_day is None
        assert timeline.longest_stage is None
        assert timeline.top_transition is None
        assert timeline.top_transition_count == 0

    def test_single_transition_round_trip(self, reconstructor, make_note, now):
        moved_at = now - timedelta(days=5, hours=6)
        note = make_note(
            "projects",
            created_days_ago=20,
            history=[{"from": "inbox", "to": "projects", "timestamp": moved_at}],
        )

        timeline = reconstructor.reconstruct([note], 30, now)

        assert timeline.transition_counts == {"inbox->projects": 1}
        assert timeline.top_transition == "inbox->projects"
        assert timeline.top_transition_count == 1
        assert timeline.avg_stage_duration_days[Location.INBOX] == pytest.approx(14.75)
        assert timeline.longest_stage is Location.INBOX

        moved_day = moved_at.date()
        created_day = note.created_at.date()
        for day in timeline.days:
            if day.date < created_day:
                assert day.total == 0
            elif day.date < moved_day:
                assert day.counts_by_location[Location.INBOX] == 1
                assert day.dominant_location is Location.INBOX
            else:
                assert day.counts_by_location[Location.PROJECTS] == 1
                assert day.dominant_location is Location.PROJECTS

    def test_totals_match_counts(self, reconstructor, make_note, now):
        notes = [
            make_note("inbox", created_days_ago=3),
            make_note("areas", created_days_ago=40),
            make_note(
                "archive",
                created_days_ago=25,
                history=[
                    {"from": "inbox", "to": "resources", "timestamp": now - timedelta(days=20)},
                    {"from": "resources", "to": "archive", "timestamp": now - timedelta(days=2)},
                ],
            ),
        ]

        timeline = reconstructor.reconstruct(notes, 14, now)

        assert len(timeline.days) == 14
        for day in timeline.days:
            assert day.total == sum(day.counts_by_location.values())
            assert set(day.counts_by_location) == set(Location)
        assert timeline.days[-1].total == 3
        assert timeline.busiest_day is not None
        assert timeline.busiest_day.total == 3

    def test_note_without_history_keeps_location(self, reconstructor, make_note, now):
        note = make_note("resources", created_days_ago=100)

        timeline = reconstructor.reconstruct([note], 7, now)

        assert all(day.counts_by_location[Location.RESOURCES] == 1 for day in timeline.days)
        assert timeline.transition_counts == {}
        assert timeline.avg_stage_duration_days == {}

    def test_top_transition(self, reconstructor, make_note, now):
        def moved(to, days_ago):
            return make_note(
                to,
                created_days_ago=30,
                history=[{"from": "inbox", "to": to, "timestamp": now - timedelta(days=days_ago)}],
            )

        notes = [moved("areas", 5), moved("areas", 6), moved("projects", 7)]

        timeline = reconstructor.reconstruct(notes, 10, now)

        assert timeline.top_transition == "inbox->areas"
        assert timeline.top_transition_count == 2
        assert timeline.transition_counts["inbox->projects"] == 1

    def test_non_positive_window(self, reconstructor, make_note, now):
        timeline = reconstructor.reconstruct([make_note()], 0, now)

        assert timeline.days == []
        assert timeline.busiest_day is None
