"""
Checklist task extraction.

Parses Tasks-plugin style checklist lines:

    - [x] Ship release ✅ 2024-01-12 📅 2024-01-10 ➕ 2024-01-01

into TaskRecord objects. Arbitrary prose is ignored, malformed dates become
None, and a failing content read yields no tasks.
"""

import re
from collections.abc import Callable
from pathlib import PurePosixPath

from paralens.models.location import Location
from paralens.models.task import TaskRecord
from paralens.utils.exceptions import ContentReadError
from paralens.utils.logger import get_logger
from paralens.utils.timeutil import parse_iso_date

logger = get_logger(__name__)

ContentReader = Callable[[str], str]

COMPLETION_MARKER = "✅"
DUE_MARKER = "📅"
CREATED_MARKER = "➕"

# Date markers plus priority / recurrence / scheduled / start glyphs
MARKER_GLYPHS = "✅📅➕⏫🔼🔽⏬🔺🔁⏳🛫"

TASK_LINE_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+\[([ xX])\]\s+(.+)$")
_GLYPH_RE = re.compile(f"[{MARKER_GLYPHS}]\ufe0f?")
_WHITESPACE_RE = re.compile(r"\s+")


def _marker_date_re(marker: str) -> re.Pattern[str]:
    return re.compile(re.escape(marker) + r"\ufe0f?\s*(\d{4}-\d{2}-\d{2})")


_COMPLETION_RE = _marker_date_re(COMPLETION_MARKER)
_DUE_RE = _marker_date_re(DUE_MARKER)
_CREATED_RE = _marker_date_re(CREATED_MARKER)


def _first_date(pattern: re.Pattern[str], text: str):
    match = pattern.search(text)
    return parse_iso_date(match.group(1)) if match else None


def clean_task_text(text: str) -> str:
    """Strip marker glyphs and collapse whitespace."""
    return _WHITESPACE_RE.sub(" ", _GLYPH_RE.sub("", text)).strip()


def parse_task_line(
    line: str,
    *,
    file_path: str,
    location: Location,
    line_number: int,
    file_name: str = "",
) -> TaskRecord | None:
    """
    Parse a single line.

    Args:
        line: Raw line of note content
        file_path: Path of the containing note
        location: Location of the containing note
        line_number: 1-based line number
        file_name: Basename of the note

    Returns:
        TaskRecord, or None when the line is not a checklist item
    """
    match = TASK_LINE_RE.match(line.rstrip("\r"))
    if not match:
        return None

    completed = match.group(1).lower() == "x"
    body = match.group(2)

    completion_date = _first_date(_COMPLETION_RE, body)
    due_date = _first_date(_DUE_RE, body)
    created_date = _first_date(_CREATED_RE, body)

    age_in_days = None
    if completed and completion_date and created_date and completion_date >= created_date:
        age_in_days = (completion_date - created_date).days

    return TaskRecord(
        file_path=file_path,
        file_name=file_name or PurePosixPath(file_path).stem,
        location=location,
        line_number=line_number,
        text=clean_task_text(body),
        completed=completed,
        completion_date=completion_date,
        due_date=due_date,
        created_date=created_date,
        age_in_days=age_in_days,
    )


class TaskExtractor:
    """Extracts checklist tasks from note content."""

    def extract(
        self,
        content: str,
        file_path: str,
        location: Location = Location.UNKNOWN,
        file_name: str = "",
    ) -> list[TaskRecord]:
        """
        Extract every task from note content.

        Args:
            content: Full note text
            file_path: Path of the note
            location: Resolved PARA location of the note
            file_name: Basename of the note

        Returns:
            Tasks in line order
        """
        tasks = []
        for index, line in enumerate(content.split("\n")):
            task = parse_task_line(
                line,
                file_path=file_path,
                location=location,
                line_number=index + 1,
                file_name=file_name,
            )
            if task is not None:
                tasks.append(task)
        return tasks

    def extract_file(
        self,
        file_path: str,
        location: Location,
        reader: ContentReader,
        file_name: str = "",
    ) -> list[TaskRecord]:
        """
        Read a note through `reader` and extract its tasks.

        A failed read is reported as "no tasks for this file".

        Args:
            file_path: Path handed to the reader
            location: Resolved PARA location of the note
            reader: Callable returning the note text
            file_name: Basename of the note

        Returns:
            Tasks in line order, or [] when the content cannot be read
        """
        try:
            content = reader(file_path)
        except (ContentReadError, OSError, UnicodeError) as e:
            # bind() rather than kwargs: paths may contain braces
            logger.bind(operation="extract_file", path=file_path).warning(
                f"Failed to read tasks from {file_path}: {e}"
            )
            return []
        return self.extract(content, file_path, location, file_name)
