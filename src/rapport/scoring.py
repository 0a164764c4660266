"""Needs-attention scoring: per-report summaries, team health, workspace rollup.

Everything here is pure: the same inputs (including ``today``) always give
the same result.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TypeVar

from .colors import RGB, report_color
from .model.entry import JournalEntry
from .model.report import Report

T = TypeVar("T")

# Number of most recent entries (of any kind) inspected for mood.
RECENT_ENTRY_WINDOW = 3

NEVER_MET_SCORE = 100
OVERDUE_SCORE_PER_DAY = 10
OVERDUE_SCORE_CAP = 80
APPROACHING_DUE_DAYS = 2
APPROACHING_DUE_SCORE = 5
NO_MOOD_SCORE = 10
LOW_MOOD_THRESHOLD = 2
LOW_MOOD_SCORE = 20
FALLING_TREND_SCORE = 15

HEALTH_MAX = 100.0
HEALTH_TARGET_MOOD = 4.0
HEALTH_MOOD_PENALTY = 10.0
HEALTH_NO_MOOD_PENALTY = 10.0
HEALTH_OVERDUE_WEIGHT = 40.0
HEALTH_FALLING_WEIGHT = 20.0


class MoodTrend(Enum):
    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"

    @property
    def arrow(self) -> str:
        return {"rising": "↑", "stable": "→", "falling": "↓"}[self.value]


@dataclass(frozen=True)
class TeamMetrics:
    """Health of a manager's team of second-level reports."""

    team_size: int
    average_mood: float | None
    mood_trend: MoodTrend | None
    overdue_count: int
    health_score: int  # 0-100


@dataclass(frozen=True)
class ReportSummary:
    name: str
    level: str
    meeting_frequency: str
    active: bool
    days_since_meeting: int | None
    is_overdue: bool
    recent_mood: int | None
    mood_trend: MoodTrend | None
    color: RGB
    urgency_score: int
    is_manager: bool = False
    team_metrics: TeamMetrics | None = None


@dataclass(frozen=True)
class WorkspaceSummary:
    team_size: int = 0
    active_count: int = 0
    overdue_count: int = 0
    average_mood: float | None = None
    total_report_count: int = 0  # direct reports plus second-level reports


def recent_moods(entries: Sequence[JournalEntry]) -> list[int]:
    """Valid moods from the last few entries, newest first."""
    window = entries[-RECENT_ENTRY_WINDOW:]
    return [e.mood for e in reversed(window) if e.mood is not None]


def mood_trend(moods: Sequence[int]) -> MoodTrend | None:
    """Compare the newest mood (first) with the oldest (last)."""
    if len(moods) < 2:
        return None
    diff = moods[0] - moods[-1]
    if diff > 0:
        return MoodTrend.RISING
    if diff < 0:
        return MoodTrend.FALLING
    return MoodTrend.STABLE


def urgency_score(
    days_since: int | None,
    frequency_days: int,
    overdue_threshold: int,
    mood: int | None,
    trend: MoodTrend | None,
) -> int:
    """Additive heuristic; higher means the report needs attention sooner.

    - never met: +100
    - overdue: +10 per day past cadence + threshold, capped at 80
    - within 2 days of the cadence (not overdue): +5
    - no mood data: +10; mood 1-2: +20
    - falling trend: +15
    """
    score = 0

    if days_since is None:
        score += NEVER_MET_SCORE
    else:
        days_overdue = days_since - frequency_days - overdue_threshold
        if days_overdue > 0:
            score += min(days_overdue * OVERDUE_SCORE_PER_DAY, OVERDUE_SCORE_CAP)
        elif frequency_days - days_since <= APPROACHING_DUE_DAYS:
            score += APPROACHING_DUE_SCORE

    if mood is None:
        score += NO_MOOD_SCORE
    elif mood <= LOW_MOOD_THRESHOLD:
        score += LOW_MOOD_SCORE

    if trend is MoodTrend.FALLING:
        score += FALLING_TREND_SCORE

    return score


def summarize_report(
    report: Report,
    entries: Sequence[JournalEntry],
    overdue_threshold_days: int,
    today: date | None = None,
    team_summaries: Sequence[ReportSummary] | None = None,
) -> ReportSummary:
    """Compute the derived summary for one report.

    ``entries`` must be in ascending timestamp order. ``team_summaries`` is
    only used for managers.
    """
    today = today or date.today()

    meeting_dates = [e.date for e in entries if e.is_meeting]
    days_since = (today - max(meeting_dates)).days if meeting_dates else None

    frequency_days = report.cadence_days
    is_overdue = days_since is None or days_since > frequency_days + overdue_threshold_days

    moods = recent_moods(entries)
    recent = moods[0] if moods else None
    trend = mood_trend(moods)

    metrics = None
    if report.is_manager and team_summaries:
        metrics = team_metrics(team_summaries)

    profile = report.profile
    return ReportSummary(
        name=profile.name,
        level=profile.level or "-",
        meeting_frequency=profile.meeting_frequency,
        active=profile.active,
        days_since_meeting=days_since,
        is_overdue=is_overdue,
        recent_mood=recent,
        mood_trend=trend,
        color=report_color(profile.color, profile.name),
        urgency_score=urgency_score(
            days_since, frequency_days, overdue_threshold_days, recent, trend
        ),
        is_manager=report.is_manager,
        team_metrics=metrics,
    )


def _average(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def team_metrics(team_summaries: Sequence[ReportSummary]) -> TeamMetrics:
    team_size = len(team_summaries)
    active = [s for s in team_summaries if s.active]

    average = _average([s.recent_mood for s in active if s.recent_mood is not None])
    rising = sum(1 for s in active if s.mood_trend is MoodTrend.RISING)
    falling = sum(1 for s in active if s.mood_trend is MoodTrend.FALLING)
    overdue = sum(1 for s in active if s.is_overdue)

    if rising > 2 * falling:
        trend = MoodTrend.RISING
    elif falling > 2 * rising:
        trend = MoodTrend.FALLING
    elif rising or falling:
        trend = MoodTrend.STABLE
    else:
        trend = None

    health = HEALTH_MAX
    if average is None:
        health -= HEALTH_NO_MOOD_PENALTY
    else:
        health -= max(0.0, HEALTH_TARGET_MOOD - average) * HEALTH_MOOD_PENALTY
    if team_size:
        health -= overdue / team_size * HEALTH_OVERDUE_WEIGHT
        health -= falling / team_size * HEALTH_FALLING_WEIGHT
    health = min(max(health, 0.0), HEALTH_MAX)

    return TeamMetrics(
        team_size=team_size,
        average_mood=average,
        mood_trend=trend,
        overdue_count=overdue,
        health_score=int(health),
    )


def workspace_summary(summaries: Iterable[ReportSummary]) -> WorkspaceSummary:
    summaries = list(summaries)
    active = [s for s in summaries if s.active]
    second_level = sum(s.team_metrics.team_size for s in summaries if s.team_metrics)
    return WorkspaceSummary(
        team_size=len(summaries),
        active_count=len(active),
        overdue_count=sum(1 for s in active if s.is_overdue),
        average_mood=_average([s.recent_mood for s in active if s.recent_mood is not None]),
        total_report_count=len(summaries) + second_level,
    )


def sort_by_urgency(items: Iterable[T], score: Callable[[T], int]) -> list[T]:
    """Most urgent first; equal scores keep their original order."""
    return sorted(items, key=lambda item: -score(item))
