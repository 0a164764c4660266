"""Input buffers for the new-report and entry-input modals."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rapport.model.entry import Context
from rapport.model.report import CADENCES, ReportType

LEVEL_COUNT = 5
DEFAULT_LEVEL_INDEX = 2  # P3 / M3
DEFAULT_FREQUENCY_INDEX = 1  # biweekly


def cadence_index(cadence: str) -> int:
    """Position of ``cadence`` among the form choices; biweekly if unknown."""
    try:
        return CADENCES.index(cadence.strip().lower())
    except ValueError:
        return DEFAULT_FREQUENCY_INDEX


class NewReportField(Enum):
    REPORT_TYPE = "report_type"
    NAME = "name"
    TITLE = "title"
    LEVEL = "level"
    FREQUENCY = "frequency"

    def next(self) -> NewReportField:
        members = list(NewReportField)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> NewReportField:
        members = list(NewReportField)
        return members[(members.index(self) - 1) % len(members)]

    @property
    def is_text(self) -> bool:
        return self in (NewReportField.NAME, NewReportField.TITLE)


@dataclass
class NewReportForm:
    report_type: ReportType = ReportType.INDIVIDUAL
    name: str = ""
    title: str = ""
    level_index: int = DEFAULT_LEVEL_INDEX
    frequency_index: int = DEFAULT_FREQUENCY_INDEX
    field: NewReportField = NewReportField.REPORT_TYPE

    @property
    def level(self) -> str:
        prefix = "M" if self.report_type.is_manager else "P"
        return f"{prefix}{self.level_index + 1}"

    @property
    def frequency(self) -> str:
        return CADENCES[self.frequency_index]

    @property
    def is_valid(self) -> bool:
        return bool(self.name.strip()) and bool(self.title.strip())

    def next_field(self) -> None:
        self.field = self.field.next()

    def prev_field(self) -> None:
        self.field = self.field.prev()

    def _toggle_type(self) -> None:
        self.report_type = (
            ReportType.INDIVIDUAL if self.report_type.is_manager else ReportType.MANAGER
        )

    def left(self) -> None:
        if self.field is NewReportField.REPORT_TYPE:
            self._toggle_type()
        elif self.field is NewReportField.LEVEL:
            self.level_index = max(self.level_index - 1, 0)
        elif self.field is NewReportField.FREQUENCY:
            self.frequency_index = max(self.frequency_index - 1, 0)

    def right(self) -> None:
        if self.field is NewReportField.REPORT_TYPE:
            self._toggle_type()
        elif self.field is NewReportField.LEVEL:
            self.level_index = min(self.level_index + 1, LEVEL_COUNT - 1)
        elif self.field is NewReportField.FREQUENCY:
            self.frequency_index = min(self.frequency_index + 1, len(CADENCES) - 1)

    def type_char(self, char: str) -> None:
        if self.field is NewReportField.NAME:
            self.name += char
        elif self.field is NewReportField.TITLE:
            self.title += char

    def backspace(self) -> None:
        if self.field is NewReportField.NAME:
            self.name = self.name[:-1]
        elif self.field is NewReportField.TITLE:
            self.title = self.title[:-1]


@dataclass
class EntryForm:
    """Pending mood observation."""

    mood: int | None = None
    context: Context = Context.STANDUP
    notes: str = ""
