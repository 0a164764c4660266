"""Plain-text formatting shared by the TUI and the ``summary`` command."""

from __future__ import annotations

from .model.entry import JournalEntry
from .scoring import MoodTrend, ReportSummary, TeamMetrics, WorkspaceSummary

NAME_WIDTH = 24

DASHBOARD_HEADER = (
    f"{'Name':<{NAME_WIDTH}} {'Level':<6} {'Cadence':<9} "
    f"{'Last 1:1':<10} {'Mood':<5} {'Trend':<5} {'Score':>5}"
)


def format_days(days: int | None) -> str:
    if days is None:
        return "never"
    if days == 0:
        return "today"
    if days == 1:
        return "1 day"
    return f"{days} days"


def format_mood(mood: int | None) -> str:
    return "-" if mood is None else f"{mood}/5"


def format_trend(trend: MoodTrend | None) -> str:
    return trend.arrow if trend else "-"


def format_average(value: float | None) -> str:
    return "-" if value is None else f"{value:.1f}"


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def format_summary_row(summary: ReportSummary) -> str:
    name = summary.name + (" *" if summary.is_manager else "")
    if not summary.active:
        name += " (archived)"
    last = format_days(summary.days_since_meeting)
    if summary.is_overdue:
        last += "!"
    return (
        f"{_truncate(name, NAME_WIDTH):<{NAME_WIDTH}} "
        f"{summary.level:<6} {summary.meeting_frequency:<9} "
        f"{last:<10} {format_mood(summary.recent_mood):<5} "
        f"{format_trend(summary.mood_trend):<5} {summary.urgency_score:>5}"
    )


def format_workspace_summary(summary: WorkspaceSummary) -> str:
    return (
        f"Active {summary.active_count}/{summary.team_size}"
        f" · Overdue {summary.overdue_count}"
        f" · Avg mood {format_average(summary.average_mood)}"
        f" · {summary.total_report_count} people total"
    )


def format_team_metrics(metrics: TeamMetrics) -> str:
    return (
        f"Team of {metrics.team_size}"
        f" · health {metrics.health_score}"
        f" · avg mood {format_average(metrics.average_mood)} "
        f"{format_trend(metrics.mood_trend)}"
        f" · {metrics.overdue_count} overdue"
    )


def format_entry_line(entry: JournalEntry) -> str:
    when = entry.timestamp.strftime("%Y-%m-%d %H:%M" if entry.has_time else "%Y-%m-%d")
    context = entry.effective_context
    label = context.short if context else "-"
    return f"{when:<16}  {label:<4}  {format_mood(entry.mood)}"


HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    ("Dashboard", [
        ("j/k, arrows", "move selection"),
        ("g/G", "first / last"),
        ("Enter, space", "open report"),
        ("n", "recruit a new report"),
        ("a", "archive selected report"),
        ("r, Ctrl-R", "reload from disk"),
    ]),
    ("Report", [
        ("Enter, l", "view meeting"),
        ("e", "edit meeting in $EDITOR"),
        ("n", "new 1-on-1"),
        ("m", "record mood observation"),
        ("Delete", "delete meeting"),
        ("Esc, h", "back"),
    ]),
    ("Meeting", [
        ("F1-F5", "set mood"),
        ("e", "edit in $EDITOR"),
        ("Delete", "delete"),
    ]),
    ("Anywhere", [
        ("?", "toggle help"),
        ("q, Ctrl-Q, Ctrl-C", "quit"),
    ]),
]
