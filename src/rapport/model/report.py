"""Report profiles: the people being tracked."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path

DEFAULT_CADENCE = "biweekly"

CADENCE_DAYS = {
    "weekly": 7,
    "biweekly": 14,
    "monthly": 30,
}

CADENCES = ("weekly", "biweekly", "monthly")


class ReportType(Enum):
    INDIVIDUAL = "individual"
    MANAGER = "manager"

    @property
    def is_manager(self) -> bool:
        return self is ReportType.MANAGER

    @classmethod
    def parse(cls, value) -> ReportType:
        if value is None:
            return cls.INDIVIDUAL
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INDIVIDUAL


def cadence_days(cadence: str) -> int:
    """Days between expected meetings; unknown cadences count as biweekly."""
    return CADENCE_DAYS.get(cadence.strip().lower(), CADENCE_DAYS[DEFAULT_CADENCE])


@dataclass
class ManagerInfo:
    team_name: str | None = None


@dataclass
class ReportProfile:
    """Fields stored in the ``_profile.md`` header."""

    name: str
    title: str | None = None
    start_date: date | None = None
    level: str | None = None
    meeting_frequency: str = DEFAULT_CADENCE
    active: bool = True
    report_type: ReportType = ReportType.INDIVIDUAL
    manager_info: ManagerInfo | None = None

    # Personal context for building rapport
    birthday: date | None = None
    partner: str | None = None
    children: list[str] = field(default_factory=list)

    skills: dict[str, dict[str, str]] = field(default_factory=dict)
    skills_updated: date | None = None

    color: str | None = None  # "#RRGGBB"; derived from name when unset


@dataclass
class Report:
    """A loaded report: profile, location on disk and (for managers) team."""

    slug: str
    path: Path
    profile: ReportProfile
    notes_content: str = ""
    manager_slug: str | None = None  # set for second-level reports
    team: list[Report] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def is_manager(self) -> bool:
        return self.profile.report_type.is_manager

    @property
    def is_second_level(self) -> bool:
        return self.manager_slug is not None

    @property
    def cadence_days(self) -> int:
        return cadence_days(self.profile.meeting_frequency)

    def add_team_member(self, member: Report) -> None:
        """Attach a second-level report. Only managers may own a team."""
        if not self.is_manager:
            raise ValueError(f"{self.slug} is not a manager and cannot own a team")
        self.team.append(member)
