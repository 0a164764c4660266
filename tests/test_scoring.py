"""Tests for urgency scoring, mood trends and team health."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path

from rapport.model.entry import Context, JournalEntry
from rapport.model.report import Report, ReportProfile, ReportType
from rapport.scoring import (
    MoodTrend,
    ReportSummary,
    mood_trend,
    recent_moods,
    sort_by_urgency,
    summarize_report,
    team_metrics,
    urgency_score,
    workspace_summary,
)

TODAY = date(2026, 3, 16)


def _report(frequency: str = "biweekly", report_type=ReportType.INDIVIDUAL) -> Report:
    return Report(
        slug="alex-chen",
        path=Path("alex-chen"),
        profile=ReportProfile(
            name="Alex Chen", level="P3", meeting_frequency=frequency, report_type=report_type
        ),
    )


def _entry(days_ago: int, mood: int | None = None, context=Context.MEETING) -> JournalEntry:
    day = TODAY - timedelta(days=days_ago)
    return JournalEntry(
        timestamp=datetime(day.year, day.month, day.day, 10, 0),
        raw_mood=mood,
        context=context,
    )


def _summary(
    mood: int | None = None,
    trend: MoodTrend | None = None,
    overdue: bool = False,
    active: bool = True,
) -> ReportSummary:
    return ReportSummary(
        name="x",
        level="P2",
        meeting_frequency="biweekly",
        active=active,
        days_since_meeting=1,
        is_overdue=overdue,
        recent_mood=mood,
        mood_trend=trend,
        color=(0, 0, 0),
        urgency_score=0,
    )


class TestUrgencyScore:
    def test_overdue_by_three_days(self):
        assert urgency_score(20, 14, 3, 3, MoodTrend.STABLE) == 30

    def test_never_met_without_mood(self):
        assert urgency_score(None, 14, 3, None, None) == 110

    def test_low_mood_and_falling_on_schedule(self):
        assert urgency_score(7, 14, 3, 2, MoodTrend.FALLING) == 35

    def test_overdue_contribution_is_capped(self):
        assert urgency_score(200, 14, 3, 4, None) == 80

    def test_approaching_due(self):
        assert urgency_score(12, 14, 3, 4, None) == 5
        assert urgency_score(11, 14, 3, 4, None) == 0

    def test_past_cadence_within_threshold_counts_as_approaching(self):
        # 16 days: not overdue (14 + 3) but already past the due date
        assert urgency_score(16, 14, 3, 4, None) == 5


class TestMoodTrend:
    def test_needs_two_samples(self):
        assert mood_trend([]) is None
        assert mood_trend([3]) is None

    def test_compares_newest_with_oldest(self):
        assert mood_trend([4, 1, 2]) is MoodTrend.RISING
        assert mood_trend([2, 5, 4]) is MoodTrend.FALLING
        assert mood_trend([3, 1, 3]) is MoodTrend.STABLE

    def test_recent_window_is_three_entries(self):
        entries = [_entry(9, 5), _entry(8), _entry(7, 2), _entry(6, 4)]
        assert recent_moods(entries) == [4, 2]

    def test_out_of_range_moods_are_ignored(self):
        entries = [_entry(3, 2), _entry(2, 9), _entry(1, 3)]
        assert recent_moods(entries) == [3, 2]


class TestSummarizeReport:
    def test_no_meetings_scores_at_least_110(self):
        entries = [
            _entry(3, context=Context.STANDUP),
            _entry(1, context=Context.SLACK),
        ]
        summary = summarize_report(_report(), entries, 3, today=TODAY)
        assert summary.days_since_meeting is None
        assert summary.is_overdue is True
        assert summary.urgency_score >= 110

    def test_overdue_report(self):
        summary = summarize_report(_report(), [_entry(20, 3)], 3, today=TODAY)
        assert summary.days_since_meeting == 20
        assert summary.is_overdue is True
        assert summary.recent_mood == 3
        assert summary.mood_trend is None
        assert summary.urgency_score == 30

    def test_observations_do_not_reset_meeting_clock(self):
        entries = [_entry(10, 4), _entry(1, 4, Context.STANDUP)]
        summary = summarize_report(_report(), entries, 3, today=TODAY)
        assert summary.days_since_meeting == 10
        assert summary.recent_mood == 4

    def test_falling_mood(self):
        entries = [_entry(20, 4), _entry(14, 3), _entry(7, 2)]
        summary = summarize_report(_report(), entries, 3, today=TODAY)
        assert summary.mood_trend is MoodTrend.FALLING
        assert summary.urgency_score == 35

    def test_defaults_for_missing_level(self):
        report = _report()
        report.profile.level = None
        assert summarize_report(report, [], 3, today=TODAY).level == "-"

    def test_idempotent(self):
        entries = [_entry(20, 4), _entry(5, 2)]
        first = summarize_report(_report(), entries, 3, today=TODAY)
        second = summarize_report(_report(), entries, 3, today=TODAY)
        assert first == second

    def test_team_metrics_only_for_managers_with_a_team(self):
        team = [_summary(4), _summary(5)]
        ic = summarize_report(_report(), [], 3, today=TODAY, team_summaries=team)
        assert ic.team_metrics is None

        manager = _report(report_type=ReportType.MANAGER)
        assert summarize_report(manager, [], 3, today=TODAY).team_metrics is None
        with_team = summarize_report(manager, [], 3, today=TODAY, team_summaries=team)
        assert with_team.is_manager
        assert with_team.team_metrics is not None
        assert with_team.team_metrics.team_size == 2


class TestTeamMetrics:
    def test_healthy_team(self):
        metrics = team_metrics([_summary(4), _summary(5), _summary(4)])
        assert metrics.health_score >= 90
        assert metrics.overdue_count == 0
        assert metrics.mood_trend is None

    def test_struggling_team(self):
        falling = MoodTrend.FALLING
        metrics = team_metrics([
            _summary(2, falling, overdue=True),
            _summary(1, falling, overdue=True),
            _summary(3, falling, overdue=True),
        ])
        assert metrics.health_score < 50
        assert metrics.health_score == 20
        assert metrics.mood_trend is MoodTrend.FALLING
        assert metrics.average_mood == 2.0

    def test_no_mood_data(self):
        metrics = team_metrics([_summary(), _summary()])
        assert metrics.average_mood is None
        assert metrics.health_score == 90

    def test_trend_needs_a_clear_majority(self):
        rising, falling = MoodTrend.RISING, MoodTrend.FALLING
        assert team_metrics([_summary(3, rising)] * 3).mood_trend is MoodTrend.RISING
        mixed = [_summary(3, rising), _summary(3, rising), _summary(3, falling)]
        assert team_metrics(mixed).mood_trend is MoodTrend.STABLE

    def test_inactive_members_are_counted_but_not_scored(self):
        metrics = team_metrics([
            _summary(4),
            _summary(1, MoodTrend.FALLING, overdue=True, active=False),
        ])
        assert metrics.team_size == 2
        assert metrics.average_mood == 4.0
        assert metrics.overdue_count == 0
        assert metrics.health_score == 100

    def test_score_is_truncated(self):
        # 100 - 3.33 (avg mood 3.67) - 13.33 (1 of 3 overdue) = 83.33
        metrics = team_metrics([_summary(3, overdue=True), _summary(4), _summary(4)])
        assert metrics.health_score == 83


class TestWorkspaceSummary:
    def test_counts(self):
        summaries = [
            _summary(4, overdue=True),
            _summary(2),
            _summary(1, overdue=True, active=False),
            _summary(),
        ]
        result = workspace_summary(summaries)
        assert result.team_size == 4
        assert result.active_count == 3
        assert result.overdue_count == 1
        assert result.average_mood == 3.0
        assert result.total_report_count == 4

    def test_empty(self):
        result = workspace_summary([])
        assert result.team_size == 0
        assert result.average_mood is None


class TestSortByUrgency:
    def test_descending(self):
        assert sort_by_urgency([30, 110, 0], lambda s: s) == [110, 30, 0]

    def test_ties_keep_load_order(self):
        items = [("a", 10), ("b", 50), ("c", 10), ("d", 50)]
        ordered = sort_by_urgency(items, lambda item: item[1])
        assert [name for name, _ in ordered] == ["b", "d", "a", "c"]
