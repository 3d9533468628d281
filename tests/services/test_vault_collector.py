"""
Tests for VaultCollector.
"""

from datetime import UTC, datetime

import pytest

from paralens.models import Location, RawNote
from paralens.services import VaultCollector
from paralens.utils.exceptions import ContentReadError

CREATED = "2024-01-01T09:00:00Z"
MODIFIED = 1717416000000  # 2024-06-03 12:00 UTC


@pytest.fixture
def collector():
    return VaultCollector()


def raw(path="projects/launch.md", **kwargs):
    data = {"path": path, "created": CREATED, "modified": MODIFIED}
    data.update(kwargs)
    return data


class TestBuildNote:
    def test_reads_metadata_conventions(self, collector):
        note = collector.build_note(
            RawNote(
                **raw(
                    frontmatter={
                        "para": "Projects",
                        "para_history": [
                            {"from": "inbox", "to": "projects", "date": "2024-02-01"},
                        ],
                        "tags": ["work", "#launch"],
                        "review_interval": "2w",
                    },
                    inline_tags=["urgent"],
                    links=["Roadmap"],
                )
            )
        )

        assert note.location is Location.PROJECTS
        assert note.basename == "launch"
        assert [entry.key for entry in note.history] == ["inbox->projects"]
        assert note.tags == frozenset({"work", "launch", "urgent"})
        assert note.links == ["Roadmap"]
        assert note.review_interval_days == 14
        assert note.created_at == datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
        assert note.modified_at == datetime(2024, 6, 3, 12, 0, tzinfo=UTC)

    def test_scalar_tag_and_review_fallback_field(self, collector):
        note = collector.build_note(
            RawNote(**raw(frontmatter={"tags": "solo", "review_cadence": "weekly"}))
        )

        assert note.tags == frozenset({"solo"})
        assert note.review_interval_days == 7
        assert note.location is Location.UNKNOWN

    def test_malformed_history_is_dropped(self, collector):
        note = collector.build_note(
            RawNote(**raw(frontmatter={"para": "areas", "para_history": "not a list"}))
        )

        assert note.history == []


class TestCollect:
    def test_extracts_tasks_from_inline_content(self, collector, now):
        content = "# Launch\n- [ ] Draft plan 📅 2024-06-14\n- [x] Book room\n"

        snapshot = collector.collect(
            [raw(frontmatter={"para": "projects"}, content=content)], collected_at=now
        )

        assert len(snapshot.notes) == 1
        assert [task.text for task in snapshot.tasks] == ["Draft plan 2024-06-14", "Book room"]
        assert snapshot.tasks[0].location is Location.PROJECTS
        assert snapshot.tasks[0].file_name == "launch"
        assert snapshot.tasks[0].line_number == 2
        assert snapshot.collected_at == now
        assert snapshot.tasks_for("projects/launch.md") == snapshot.tasks

    def test_uses_reader_when_no_content(self, collector, now):
        contents = {"inbox/todo.md": "- [ ] Call back\n"}

        snapshot = collector.collect(
            [raw("inbox/todo.md", frontmatter={"para": "inbox"})],
            reader=contents.__getitem__,
            collected_at=now,
        )

        assert [task.text for task in snapshot.tasks] == ["Call back"]

    def test_unreadable_content_keeps_note(self, collector, now):
        def reader(path):
            raise ContentReadError(f"cannot read {path}")

        snapshot = collector.collect([raw()], reader=reader, collected_at=now)

        assert len(snapshot.notes) == 1
        assert snapshot.tasks == []

    def test_skips_notes_with_bad_timestamps(self, collector, now):
        notes = [raw("good.md"), raw("bad.md", created="yesterday-ish"), {"path": "no-dates.md"}]

        snapshot = collector.collect(notes, collected_at=now)

        assert [note.path for note in snapshot.notes] == ["good.md"]

    def test_accepts_raw_note_models(self, collector, now):
        snapshot = collector.collect([RawNote(**raw())], collected_at=now)

        assert len(snapshot.notes) == 1

    def test_empty(self, collector, now):
        snapshot = collector.collect([], collected_at=now)

        assert snapshot.notes == []
        assert snapshot.tasks == []
