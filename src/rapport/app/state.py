"""Application model: loaded reports, derived summaries and the UI mode.

The model is the only mutable state in the application. Each report is held
as one ``ReportRecord`` bundling the report with its entries and summary, so
the three can never drift out of alignment.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import ClassVar

from rapport.app.forms import EntryForm, NewReportForm
from rapport.model.entry import JournalEntry
from rapport.model.report import Report
from rapport.model.workspace import Workspace
from rapport.scoring import (
    ReportSummary,
    WorkspaceSummary,
    sort_by_urgency,
    summarize_report,
    workspace_summary,
)
from rapport.storage.errors import StorageError
from rapport.storage.journal import delete_entry_file, load_entries
from rapport.storage.profiles import load_report, load_report_with_manager
from rapport.storage.workspace import (
    has_team_dir,
    list_report_dirs,
    list_team_member_dirs,
    load_workspace,
)

logger = logging.getLogger(__name__)

DEFAULT_STATUS_SECONDS = 3.0


class ViewMode(Enum):
    DASHBOARD = "dashboard"
    REPORT_DETAIL = "report_detail"
    NOTE_VIEWER = "note_viewer"
    NEW_REPORT = "new_report"
    DELETE_CONFIRM = "delete_confirm"
    ENTRY_INPUT = "entry_input"
    HELP = "help"


@dataclass
class DashboardMode:
    view: ClassVar[ViewMode] = ViewMode.DASHBOARD


@dataclass
class ReportDetailMode:
    report_index: int
    view: ClassVar[ViewMode] = ViewMode.REPORT_DETAIL


@dataclass
class NoteViewerMode:
    report_index: int
    entry_index: int
    content: str = ""
    mood: int | None = None
    view: ClassVar[ViewMode] = ViewMode.NOTE_VIEWER


@dataclass
class NewReportMode:
    form: NewReportForm = field(default_factory=NewReportForm)
    previous: Mode = field(default_factory=DashboardMode)
    view: ClassVar[ViewMode] = ViewMode.NEW_REPORT


@dataclass
class DeleteConfirmMode:
    report_index: int
    entry_index: int
    from_list: bool  # opened from the meeting list rather than the viewer
    previous: Mode
    view: ClassVar[ViewMode] = ViewMode.DELETE_CONFIRM


@dataclass
class EntryInputMode:
    report_index: int
    form: EntryForm = field(default_factory=EntryForm)
    view: ClassVar[ViewMode] = ViewMode.ENTRY_INPUT


@dataclass
class HelpMode:
    previous: Mode = field(default_factory=DashboardMode)
    view: ClassVar[ViewMode] = ViewMode.HELP


Mode = (
    DashboardMode | ReportDetailMode | NoteViewerMode | NewReportMode
    | DeleteConfirmMode | EntryInputMode | HelpMode
)


@dataclass
class ReportRecord:
    """A report together with its entries (oldest first) and summary."""

    report: Report
    entries: list[JournalEntry]
    summary: ReportSummary
    team: list[ReportRecord] = field(default_factory=list)

    @property
    def meetings(self) -> list[JournalEntry]:
        """Meetings newest first, as they are displayed."""
        return [e for e in reversed(self.entries) if e.is_meeting]

    @property
    def meeting_count(self) -> int:
        return sum(1 for e in self.entries if e.is_meeting)


def meeting_entry_index(entries: list[JournalEntry], display_index: int) -> int | None:
    """Map a newest-first meeting display index to an index into ``entries``.

    Non-meeting entries take no part in the numbering. Returns None when the
    display index does not name a meeting.
    """
    meeting_indices = [i for i, e in enumerate(entries) if e.is_meeting]
    if display_index < 0 or display_index >= len(meeting_indices):
        return None
    return meeting_indices[len(meeting_indices) - 1 - display_index]


def build_record(
    report: Report,
    entries: list[JournalEntry],
    overdue_threshold_days: int,
    today: date | None = None,
    team: list[ReportRecord] | None = None,
) -> ReportRecord:
    team = team or []
    summary = summarize_report(
        report,
        entries,
        overdue_threshold_days,
        today=today,
        team_summaries=[member.summary for member in team],
    )
    return ReportRecord(report=report, entries=entries, summary=summary, team=team)


def _load_team(
    manager: Report, workspace: Workspace, today: date | None
) -> list[ReportRecord]:
    if not has_team_dir(manager.path):
        return []
    if not manager.is_manager:
        logger.warning(
            "Ignoring team/ under %s: report is not a manager", manager.slug
        )
        return []

    team = []
    for member_dir in list_team_member_dirs(manager.path):
        try:
            member = load_report_with_manager(
                member_dir, manager.slug, workspace.default_2nd_level_frequency
            )
            entries = load_entries(member_dir)
        except (StorageError, OSError) as e:
            logger.warning("Skipping team member %s: %s", member_dir, e)
            continue
        manager.add_team_member(member)
        team.append(
            build_record(member, entries, workspace.overdue_threshold_days, today)
        )
    return sort_by_urgency(team, lambda r: r.summary.urgency_score)


def load_records(workspace: Workspace, today: date | None = None) -> list[ReportRecord]:
    """Load every direct report, most urgent first.

    A report directory that fails to load is logged and skipped.
    """
    threshold = workspace.overdue_threshold_days
    records = []
    for report_dir in list_report_dirs(workspace):
        try:
            report = load_report(
                report_dir, default_frequency=workspace.default_meeting_frequency
            )
            entries = load_entries(report_dir)
            team = _load_team(report, workspace, today)
        except (StorageError, OSError) as e:
            logger.warning("Skipping report %s: %s", report_dir, e)
            continue
        records.append(build_record(report, entries, threshold, today, team))

    logger.debug("Loaded %d reports from %s", len(records), workspace.path)
    return sort_by_urgency(records, lambda r: r.summary.urgency_score)


@dataclass
class Model:
    workspace: Workspace
    records: list[ReportRecord] = field(default_factory=list)
    workspace_summary: WorkspaceSummary = field(default_factory=WorkspaceSummary)
    mode: Mode = field(default_factory=DashboardMode)
    selected_index: int = 0
    should_quit: bool = False
    status: tuple[str, float] | None = None  # (message, monotonic time set)
    status_seconds: float = DEFAULT_STATUS_SECONDS
    today: date | None = None  # None means the current date

    @property
    def overdue_threshold_days(self) -> int:
        return self.workspace.overdue_threshold_days

    def set_status(self, message: str, now: float | None = None) -> None:
        self.status = (message, time.monotonic() if now is None else now)

    def status_text(self, now: float | None = None) -> str | None:
        """The status message, or None once it has expired."""
        if self.status is None:
            return None
        message, set_at = self.status
        now = time.monotonic() if now is None else now
        if now - set_at >= self.status_seconds:
            return None
        return message

    def clear_expired_status(self, now: float | None = None) -> None:
        if self.status is not None and self.status_text(now) is None:
            self.status = None

    @property
    def report_index(self) -> int | None:
        """Index of the report the current mode is about, if any."""
        index = getattr(self.mode, "report_index", None)
        if index is None and isinstance(self.mode, HelpMode):
            index = getattr(self.mode.previous, "report_index", None)
        return index

    @property
    def current_record(self) -> ReportRecord | None:
        index = self.report_index
        if index is None or not 0 <= index < len(self.records):
            return None
        return self.records[index]

    @property
    def selected_meeting_count(self) -> int:
        record = self.current_record
        return record.meeting_count if record else 0

    def meeting_display_to_entry_index(self, display_index: int) -> int | None:
        record = self.current_record
        if record is None:
            return None
        return meeting_entry_index(record.entries, display_index)

    def current_list_len(self) -> int:
        """Length of the list the selection cursor moves over."""
        if isinstance(self.mode, DashboardMode):
            return len(self.records)
        if isinstance(self.mode, ReportDetailMode):
            return self.selected_meeting_count
        return 0

    def clamp_selection(self) -> None:
        """Keep the cursor inside the dashboard or meeting list."""
        if not isinstance(self.mode, (DashboardMode, ReportDetailMode)):
            return
        length = self.current_list_len()
        if length == 0:
            self.selected_index = 0
        elif self.selected_index >= length:
            self.selected_index = length - 1


def recompute(model: Model, record: ReportRecord) -> None:
    """Refresh a record's summary and the workspace rollup after a mutation."""
    record.summary = summarize_report(
        record.report,
        record.entries,
        model.overdue_threshold_days,
        today=model.today,
        team_summaries=[member.summary for member in record.team],
    )
    model.workspace_summary = workspace_summary(r.summary for r in model.records)


def reload(model: Model) -> None:
    """Re-read all reports from disk and re-sort by urgency."""
    model.records = load_records(model.workspace, model.today)
    model.workspace_summary = workspace_summary(r.summary for r in model.records)


def load_model(
    path: Path,
    status_seconds: float = DEFAULT_STATUS_SECONDS,
    today: date | None = None,
) -> Model:
    """Load the workspace at ``path``. Raises if it is not a valid workspace."""
    model = Model(
        workspace=load_workspace(path),
        status_seconds=status_seconds,
        today=today,
    )
    reload(model)
    return model


def delete_entry(model: Model, report_index: int, entry_index: int) -> None:
    """Delete an entry file and drop it from the model.

    Raises if the file cannot be removed; the model is then unchanged.
    """
    record = model.records[report_index]
    delete_entry_file(record.entries[entry_index])
    del record.entries[entry_index]
    recompute(model, record)
