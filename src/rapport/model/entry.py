"""Journal entries: 1-on-1 meetings and lightweight mood observations.

Entries live as Markdown files named after their timestamp:

- ``YYYY-MM-DDTHHMMSS.md`` (current form, always used for new files)
- ``YYYY-MM-DD.md`` (legacy date-only form, read as midnight)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from pathlib import Path

MOOD_MIN = 1
MOOD_MAX = 5

# Tried in order; the first that parses wins.
_TIMESTAMP_FORMATS = ("%Y-%m-%dT%H%M%S", "%Y-%m-%d")
_FILENAME_FORMAT = "%Y-%m-%dT%H%M%S"


class Context(Enum):
    """What kind of interaction an entry records."""

    MEETING = "meeting"
    STANDUP = "standup"
    SLACK = "slack"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def short(self) -> str:
        return _SHORT_LABELS[self]

    def next(self) -> Context:
        members = list(Context)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> Context:
        members = list(Context)
        return members[(members.index(self) - 1) % len(members)]

    @classmethod
    def parse(cls, value) -> Context | None:
        """Parse a header value, case-insensitively. Unknown values give None."""
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


_SHORT_LABELS = {
    Context.MEETING: "1:1",
    Context.STANDUP: "Stnd",
    Context.SLACK: "Slck",
    Context.OTHER: "Othr",
}


def valid_mood(value) -> int | None:
    """Return ``value`` as a mood if it is an integer in 1-5, else None."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if MOOD_MIN <= value <= MOOD_MAX:
        return value
    return None


@dataclass
class JournalEntry:
    """One dated observation owned by a single report."""

    timestamp: datetime
    path: Path = field(default_factory=Path)
    raw_mood: int | None = None  # as stored; may be out of range
    context: Context | None = None
    content: str = ""

    @property
    def mood(self) -> int | None:
        return valid_mood(self.raw_mood)

    @property
    def is_meeting(self) -> bool:
        """True for explicit meetings, and for untagged entries with content."""
        if self.context is not None:
            return self.context is Context.MEETING
        return bool(self.content.strip())

    @property
    def effective_context(self) -> Context | None:
        if self.context is not None:
            return self.context
        return Context.MEETING if self.content.strip() else None

    @property
    def date(self) -> date:
        return self.timestamp.date()

    @property
    def has_time(self) -> bool:
        return self.timestamp.time() != time(0, 0, 0)


def parse_entry_timestamp(filename: str) -> datetime | None:
    """Parse an entry filename into its timestamp.

    Returns None for anything that is not ``<timestamp>.md``.
    """
    if not filename.endswith(".md"):
        return None
    stem = filename[: -len(".md")]
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(stem, fmt)
        except ValueError:
            continue
    return None


def format_entry_filename(timestamp: datetime) -> str:
    return f"{timestamp.strftime(_FILENAME_FORMAT)}.md"
