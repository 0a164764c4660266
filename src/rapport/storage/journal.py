"""Journal entries stored as timestamped Markdown files.

Two layouts are merged on load:

- legacy: entries directly in the report directory
- current: entries in the report's ``journal/`` subdirectory (all new files)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from pathlib import Path

from rapport.model.entry import (
    Context,
    JournalEntry,
    format_entry_filename,
    parse_entry_timestamp,
    valid_mood,
)
from rapport.storage.errors import DuplicateEntryError, StorageError, ValidationError
from rapport.storage.frontmatter import read_document, render_document

logger = logging.getLogger(__name__)

JOURNAL_DIR = "journal"

MEETING_TEMPLATE = (
    "# 1-on-1 - {date}\n\n"
    "## Discussion\n\n"
    "## Notes\n\n"
    "## Action Items\n- [ ] \n"
)


def load_entries(report_dir: Path) -> list[JournalEntry]:
    """Load every entry for a report, oldest first."""
    entries: list[JournalEntry] = []
    for directory in (report_dir, report_dir / JOURNAL_DIR):
        entries.extend(_load_entries_from_dir(directory))
    entries.sort(key=lambda e: e.timestamp)
    return entries


def _load_entries_from_dir(directory: Path) -> list[JournalEntry]:
    if not directory.is_dir():
        return []

    entries = []
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.name.startswith("_"):
            continue
        timestamp = parse_entry_timestamp(path.name)
        if timestamp is None:
            continue
        try:
            entries.append(load_entry(path, timestamp))
        except (StorageError, OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable entry %s: %s", path, e)
    return entries


def load_entry(path: Path, timestamp: datetime) -> JournalEntry:
    data, body = read_document(path.read_text(encoding="utf-8"))
    raw_mood = data.get("mood")
    if isinstance(raw_mood, bool) or not isinstance(raw_mood, int):
        raw_mood = None
    return JournalEntry(
        timestamp=timestamp,
        path=path,
        raw_mood=raw_mood,
        context=Context.parse(data.get("context")),
        content=body,
    )


def reload_entry(entry: JournalEntry) -> JournalEntry:
    """Re-read an entry from disk, e.g. after it was edited externally."""
    return load_entry(entry.path, entry.timestamp)


def save_entry(entry: JournalEntry) -> None:
    data: dict = {"mood": entry.raw_mood}
    if entry.context is not None:
        data["context"] = entry.context.value
    entry.path.parent.mkdir(parents=True, exist_ok=True)
    entry.path.write_text(render_document(data, entry.content), encoding="utf-8")


def _check_free(report_dir: Path, timestamp: datetime) -> None:
    """Raise if any file already holds an entry at ``timestamp``."""
    names = [format_entry_filename(timestamp)]
    if timestamp.time() == time(0, 0, 0):
        names.append(f"{timestamp.date().isoformat()}.md")
    for directory in (report_dir, report_dir / JOURNAL_DIR):
        for name in names:
            if (directory / name).exists():
                raise DuplicateEntryError(
                    f"Entry already exists for {timestamp.isoformat(sep=' ')}"
                )


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


def create_entry(
    report_dir: Path,
    mood: int | None,
    context: Context | None,
    notes: str,
    timestamp: datetime | None = None,
) -> JournalEntry:
    """Create a mood observation (or any entry) timestamped now."""
    if mood is not None and valid_mood(mood) is None:
        raise ValidationError(f"Mood must be between 1 and 5, got {mood}")

    timestamp = timestamp or _now()
    _check_free(report_dir, timestamp)

    entry = JournalEntry(
        timestamp=timestamp,
        path=report_dir / JOURNAL_DIR / format_entry_filename(timestamp),
        raw_mood=mood,
        context=context,
        content=notes,
    )
    save_entry(entry)
    logger.info("Created entry %s", entry.path)
    return entry


def create_meeting(report_dir: Path, on_date: date | None = None) -> JournalEntry:
    """Create a 1-on-1 meeting from the template.

    Without ``on_date`` the meeting is timestamped now; with it, at midnight
    of that day.
    """
    if on_date is None:
        timestamp = _now()
    else:
        timestamp = datetime.combine(on_date, time(0, 0, 0))
    _check_free(report_dir, timestamp)

    entry = JournalEntry(
        timestamp=timestamp,
        path=report_dir / JOURNAL_DIR / format_entry_filename(timestamp),
        context=Context.MEETING,
        content=MEETING_TEMPLATE.format(date=timestamp.strftime("%B %d, %Y")),
    )
    save_entry(entry)
    logger.info("Created meeting %s", entry.path)
    return entry


def update_entry_mood(entry: JournalEntry, mood: int) -> JournalEntry:
    """Persist a new mood and return the updated entry."""
    if valid_mood(mood) is None:
        raise ValidationError(f"Mood must be between 1 and 5, got {mood}")
    updated = replace(entry, raw_mood=mood)
    save_entry(updated)
    return updated


def delete_entry_file(entry: JournalEntry) -> None:
    entry.path.unlink()
    logger.info("Deleted entry %s", entry.path)
