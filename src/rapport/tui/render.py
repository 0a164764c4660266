"""Curses renderer: draws the model, never changes it."""

from __future__ import annotations

import curses

from rapport.app.forms import NewReportField
from rapport.app.state import (
    DashboardMode,
    DeleteConfirmMode,
    EntryInputMode,
    HelpMode,
    Model,
    NewReportMode,
    NoteViewerMode,
    ReportDetailMode,
    ReportRecord,
)
from rapport.colors import RGB, nearest_basic_color
from rapport.formatting import (
    DASHBOARD_HEADER,
    HELP_SECTIONS,
    format_days,
    format_entry_line,
    format_mood,
    format_summary_row,
    format_team_metrics,
    format_trend,
    format_workspace_summary,
)
from rapport.model.entry import Context

RECENT_OBSERVATIONS = 5
STATUS_PAIR = 8
WARN_PAIR = 9


def init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    for color in range(1, 8):
        curses.init_pair(color, color, -1)
    curses.init_pair(STATUS_PAIR, curses.COLOR_BLACK, curses.COLOR_CYAN)
    curses.init_pair(WARN_PAIR, curses.COLOR_RED, -1)


def _color(rgb: RGB) -> int:
    if not curses.has_colors():
        return 0
    return curses.color_pair(nearest_basic_color(rgb))


def _put(win, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x >= width:
        return
    try:
        win.addnstr(y, x, text, width - x, attr)
    except curses.error:
        # Writing the bottom-right cell moves the cursor off screen.
        pass


def _draw_dashboard(win, model: Model) -> None:
    _put(win, 0, 1, "rapport", curses.A_BOLD)
    _put(win, 0, 10, format_workspace_summary(model.workspace_summary))
    _put(win, 2, 1, DASHBOARD_HEADER, curses.A_UNDERLINE)

    if not model.records:
        _put(win, 4, 1, "No reports yet. Press 'n' to add your first team member.")
        return

    height, _ = win.getmaxyx()
    visible = max(height - 5, 1)
    top = max(0, model.selected_index - visible + 1)
    for row, record in enumerate(model.records[top:top + visible]):
        index = top + row
        summary = record.summary
        attr = _color(summary.color)
        if index == model.selected_index:
            attr |= curses.A_REVERSE
        if not summary.active:
            attr |= curses.A_DIM
        _put(win, 3 + row, 1, format_summary_row(summary), attr)


def _draw_report_header(win, record: ReportRecord) -> int:
    profile = record.report.profile
    summary = record.summary
    _put(win, 0, 1, profile.name, curses.A_BOLD | _color(summary.color))
    details = " · ".join(
        part for part in (profile.title, profile.level, profile.meeting_frequency) if part
    )
    _put(win, 1, 1, details)

    overdue = "  OVERDUE" if summary.is_overdue else ""
    _put(
        win, 2, 1,
        f"Last 1:1 {format_days(summary.days_since_meeting)}"
        f" · mood {format_mood(summary.recent_mood)} {format_trend(summary.mood_trend)}"
        f" · score {summary.urgency_score}",
    )
    _put(win, 2, 60, overdue, curses.color_pair(WARN_PAIR) if curses.has_colors() else 0)

    row = 3
    if summary.team_metrics is not None:
        _put(win, row, 1, format_team_metrics(summary.team_metrics))
        row += 1
    return row + 1


def _draw_report_detail(win, model: Model, mode: ReportDetailMode) -> None:
    record = model.records[mode.report_index]
    row = _draw_report_header(win, record)
    height, width = win.getmaxyx()
    list_width = max(width // 2, 30)

    _put(win, row, 1, "1-on-1s", curses.A_UNDERLINE)
    meetings = record.meetings
    if not meetings:
        _put(win, row + 1, 1, "No meetings yet. Press 'n' to start one.")
    for i, entry in enumerate(meetings[: max(height - row - 3, 0)]):
        attr = curses.A_REVERSE if i == model.selected_index else 0
        _put(win, row + 1 + i, 1, format_entry_line(entry), attr)

    observations = [e for e in reversed(record.entries) if not e.is_meeting]
    _put(win, row, list_width, "Recent observations", curses.A_UNDERLINE)
    for i, entry in enumerate(observations[:RECENT_OBSERVATIONS]):
        line = format_entry_line(entry)
        if entry.content.strip():
            line += "  " + entry.content.strip().splitlines()[0]
        _put(win, row + 1 + i, list_width, line)

    if record.team:
        team_row = row + RECENT_OBSERVATIONS + 2
        _put(win, team_row, list_width, "Team", curses.A_UNDERLINE)
        for i, member in enumerate(record.team):
            _put(win, team_row + 1 + i, list_width, format_summary_row(member.summary))


def _draw_note_viewer(win, model: Model, mode: NoteViewerMode) -> None:
    record = model.records[mode.report_index]
    entry = record.entries[mode.entry_index]
    _put(win, 0, 1, record.report.name, curses.A_BOLD | _color(record.summary.color))
    _put(win, 1, 1, f"{format_entry_line(entry)}   F1-F5 set mood, e edit")
    _put(win, 1, 60, f"mood {format_mood(mode.mood)}")

    height, _ = win.getmaxyx()
    for i, line in enumerate(mode.content.splitlines()[: max(height - 4, 0)]):
        _put(win, 3 + i, 1, line)


def _box(win, height: int, width: int, title: str):
    screen_h, screen_w = win.getmaxyx()
    height = min(height, screen_h)
    width = min(width, screen_w)
    sub = win.derwin(height, width, (screen_h - height) // 2, (screen_w - width) // 2)
    sub.erase()
    sub.box()
    _put(sub, 0, 2, f" {title} ", curses.A_BOLD)
    return sub


def _draw_new_report(win, mode: NewReportMode) -> None:
    form = mode.form
    box = _box(win, 11, 56, "Recruit")
    cursor = {form.field: "_"} if form.field.is_text else {}

    kind = "[IC] Manager" if not form.report_type.is_manager else "IC [Manager]"
    rows = [
        (NewReportField.REPORT_TYPE, "Type", kind),
        (NewReportField.NAME, "Name", form.name + cursor.get(NewReportField.NAME, "")),
        (NewReportField.TITLE, "Title", form.title + cursor.get(NewReportField.TITLE, "")),
        (NewReportField.LEVEL, "Level", f"< {form.level} >"),
        (NewReportField.FREQUENCY, "Cadence", f"< {form.frequency} >"),
    ]
    for i, (field, name, value) in enumerate(rows):
        attr = curses.A_REVERSE if form.field is field else 0
        _put(box, 2 + i, 2, f"{name:<8}", attr)
        _put(box, 2 + i, 12, value)
    _put(box, 8, 2, "Tab/arrows move · ←/→ change · Enter create · Esc cancel")


def _draw_delete_confirm(win, model: Model, mode: DeleteConfirmMode) -> None:
    entry = model.records[mode.report_index].entries[mode.entry_index]
    box = _box(win, 6, 50, "Delete")
    _put(box, 2, 2, f"Delete entry from {format_entry_line(entry).split('  ')[0]}?")
    _put(box, 3, 2, "y/Enter delete · n/Esc cancel")


def _draw_entry_input(win, model: Model, mode: EntryInputMode) -> None:
    form = mode.form
    record = model.records[mode.report_index]
    box = _box(win, 9, 60, f"Observation: {record.report.name}")
    moods = " ".join(
        f"[{n}]" if form.mood == n else f" {n} " for n in range(1, 6)
    )
    contexts = " ".join(
        f"[{c.label}]" if c is form.context else f" {c.label} " for c in Context
    )
    _put(box, 2, 2, f"Mood     {moods}")
    _put(box, 3, 2, f"Context  {contexts}")
    _put(box, 4, 2, f"Notes    {form.notes}_")
    _put(box, 6, 2, "1-5 mood · Tab context · Enter save · Esc cancel")


def _draw_help(win) -> None:
    row = 0
    _put(win, row, 1, "Keys", curses.A_BOLD)
    row += 2
    for section, keys in HELP_SECTIONS:
        _put(win, row, 1, section, curses.A_UNDERLINE)
        row += 1
        for key, description in keys:
            _put(win, row, 3, f"{key:<20} {description}")
            row += 1
        row += 1


def _draw_status(win, model: Model) -> None:
    height, width = win.getmaxyx()
    text = model.status_text() or "? help · q quit"
    attr = curses.color_pair(STATUS_PAIR) if curses.has_colors() else curses.A_REVERSE
    _put(win, height - 1, 0, f" {text}".ljust(width), attr)


def _draw_mode(win, model: Model, mode) -> None:
    if isinstance(mode, DashboardMode):
        _draw_dashboard(win, model)
    elif isinstance(mode, ReportDetailMode):
        _draw_report_detail(win, model, mode)
    elif isinstance(mode, NoteViewerMode):
        _draw_note_viewer(win, model, mode)
    elif isinstance(mode, HelpMode):
        _draw_help(win)
    elif isinstance(mode, NewReportMode):
        _draw_mode(win, model, mode.previous)
        _draw_new_report(win, mode)
    elif isinstance(mode, DeleteConfirmMode):
        _draw_mode(win, model, mode.previous)
        _draw_delete_confirm(win, model, mode)
    elif isinstance(mode, EntryInputMode):
        _draw_mode(win, model, ReportDetailMode(mode.report_index))
        _draw_entry_input(win, model, mode)


def draw(win, model: Model) -> None:
    """Redraw the whole screen for the current mode."""
    win.erase()
    _draw_mode(win, model, model.mode)
    _draw_status(win, model)
    win.refresh()
