"""Tests for journal entry storage."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from rapport.model.entry import Context, JournalEntry
from rapport.storage.errors import DuplicateEntryError, ValidationError
from rapport.storage.journal import (
    create_entry,
    create_meeting,
    delete_entry_file,
    load_entries,
    load_entry,
    reload_entry,
    save_entry,
    update_entry_mood,
)


class TestLoadEntries:
    def test_merges_legacy_and_journal(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        make_entry(report_dir, "2026-01-15", mood=3, body="legacy notes", legacy=True)
        make_entry(report_dir, "2026-02-01T093000", mood=4, context="standup")
        make_entry(report_dir, "2026-01-20T140000", context="meeting", body="1:1")

        entries = load_entries(report_dir)
        assert [e.timestamp for e in entries] == [
            datetime(2026, 1, 15),
            datetime(2026, 1, 20, 14, 0),
            datetime(2026, 2, 1, 9, 30),
        ]
        assert entries[0].context is None
        assert entries[0].is_meeting
        assert entries[2].context is Context.STANDUP

    def test_skips_non_entries(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        make_entry(report_dir, "2026-01-15", body="ok")
        (report_dir / "journal" / "_template.md").write_text("---\n---\n")
        (report_dir / "journal" / "ideas.md").write_text("not dated")
        (report_dir / "journal" / "2026-01-16.txt").write_text("wrong extension")

        entries = load_entries(report_dir)
        assert len(entries) == 1

    def test_skips_corrupt_entry(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        make_entry(report_dir, "2026-01-15", mood=4)
        (report_dir / "journal" / "2026-01-16.md").write_text("---\nmood: [4\n---\n")

        entries = load_entries(report_dir)
        assert [e.date for e in entries] == [date(2026, 1, 15)]

    def test_empty_report(self, make_report):
        assert load_entries(make_report("alex-chen", "Alex Chen")) == []

    def test_out_of_range_mood_kept_raw(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        path = make_entry(report_dir, "2026-01-15", mood=7)
        entry = load_entry(path, datetime(2026, 1, 15))
        assert entry.raw_mood == 7
        assert entry.mood is None


class TestRoundTrip:
    def test_save_then_load(self, tmp_path: Path):
        path = tmp_path / "journal" / "2026-03-01T101500.md"
        entry = JournalEntry(
            timestamp=datetime(2026, 3, 1, 10, 15),
            path=path,
            raw_mood=2,
            context=Context.SLACK,
            content="Frustrated with on-call load.\n",
        )
        save_entry(entry)
        assert load_entry(path, entry.timestamp) == entry

    @pytest.mark.parametrize(
        "content",
        ["    indented code block\nrest\n", "\n\nstarts after blank lines", "  leading spaces"],
    )
    def test_save_then_load_keeps_leading_whitespace(self, tmp_path: Path, content):
        path = tmp_path / "journal" / "2026-03-01T101500.md"
        entry = JournalEntry(
            timestamp=datetime(2026, 3, 1, 10, 15),
            path=path,
            raw_mood=4,
            context=Context.MEETING,
            content=content,
        )
        save_entry(entry)
        assert load_entry(path, entry.timestamp).content == content

    def test_untagged_entry(self, tmp_path: Path):
        path = tmp_path / "2026-03-01.md"
        entry = JournalEntry(timestamp=datetime(2026, 3, 1), path=path, content="notes\n")
        save_entry(entry)
        loaded = load_entry(path, entry.timestamp)
        assert loaded.context is None
        assert loaded.mood is None
        assert loaded.content == "notes\n"


class TestCreateEntry:
    def test_written_to_journal_dir(self, make_report):
        report_dir = make_report("alex-chen", "Alex Chen")
        ts = datetime(2026, 3, 2, 9, 0, 5)
        entry = create_entry(report_dir, 4, Context.STANDUP, "upbeat", timestamp=ts)

        assert entry.path == report_dir / "journal" / "2026-03-02T090005.md"
        assert entry.path.exists()
        assert load_entries(report_dir) == [entry]

    def test_uses_current_time(self, make_report):
        report_dir = make_report("alex-chen", "Alex Chen")
        entry = create_entry(report_dir, None, Context.OTHER, "")
        assert entry.timestamp.microsecond == 0
        assert entry.path.name == entry.timestamp.strftime("%Y-%m-%dT%H%M%S.md")

    def test_duplicate(self, make_report):
        report_dir = make_report("alex-chen", "Alex Chen")
        ts = datetime(2026, 3, 2, 9, 0, 5)
        create_entry(report_dir, 4, Context.STANDUP, "", timestamp=ts)
        with pytest.raises(DuplicateEntryError):
            create_entry(report_dir, 3, Context.SLACK, "", timestamp=ts)

    def test_invalid_mood(self, make_report):
        report_dir = make_report("alex-chen", "Alex Chen")
        with pytest.raises(ValidationError):
            create_entry(report_dir, 6, Context.STANDUP, "")


class TestCreateMeeting:
    def test_template(self, make_report):
        report_dir = make_report("alex-chen", "Alex Chen")
        meeting = create_meeting(report_dir, date(2026, 1, 15))

        assert meeting.context is Context.MEETING
        assert meeting.is_meeting
        assert meeting.timestamp == datetime(2026, 1, 15)
        assert meeting.path.name == "2026-01-15T000000.md"
        assert meeting.content.startswith("# 1-on-1 - January 15, 2026")
        for section in ("## Discussion", "## Notes", "## Action Items"):
            assert section in meeting.content

    def test_duplicate_date_across_layouts(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        make_entry(report_dir, "2026-01-15", body="old", legacy=True)
        with pytest.raises(DuplicateEntryError):
            create_meeting(report_dir, date(2026, 1, 15))

    def test_now(self, make_report):
        report_dir = make_report("alex-chen", "Alex Chen")
        fixed = datetime(2026, 3, 16, 11, 45, 0)
        with patch("rapport.storage.journal._now", return_value=fixed):
            meeting = create_meeting(report_dir)
        assert meeting.path == report_dir / "journal" / "2026-03-16T114500.md"


class TestUpdateAndDelete:
    def test_update_mood(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        make_entry(report_dir, "2026-01-15", context="meeting", body="notes")
        entry = load_entries(report_dir)[0]

        updated = update_entry_mood(entry, 5)
        assert updated.mood == 5
        assert entry.raw_mood is None
        assert reload_entry(entry).mood == 5
        assert reload_entry(entry).content == "notes"

    def test_update_mood_rejects_out_of_range(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        make_entry(report_dir, "2026-01-15", mood=3)
        entry = load_entries(report_dir)[0]
        with pytest.raises(ValidationError):
            update_entry_mood(entry, 0)
        assert reload_entry(entry).mood == 3

    def test_delete(self, make_report, make_entry):
        report_dir = make_report("alex-chen", "Alex Chen")
        path = make_entry(report_dir, "2026-01-15", mood=3)
        delete_entry_file(load_entries(report_dir)[0])
        assert not path.exists()
        assert load_entries(report_dir) == []
