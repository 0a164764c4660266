"""Tests for modal form buffers."""

from __future__ import annotations

from rapport.app.forms import EntryForm, NewReportField, NewReportForm, cadence_index
from rapport.model.entry import Context
from rapport.model.report import ReportType


class TestNewReportForm:
    def test_defaults(self):
        form = NewReportForm()
        assert form.field is NewReportField.REPORT_TYPE
        assert form.level == "P3"
        assert form.frequency == "biweekly"
        assert not form.is_valid

    def test_fields_wrap(self):
        form = NewReportForm()
        form.prev_field()
        assert form.field is NewReportField.FREQUENCY
        form.next_field()
        assert form.field is NewReportField.REPORT_TYPE

    def test_type_toggle_changes_level_prefix(self):
        form = NewReportForm()
        form.right()
        assert form.report_type is ReportType.MANAGER
        assert form.level == "M3"
        form.left()
        assert form.report_type is ReportType.INDIVIDUAL

    def test_level_and_frequency_are_bounded(self):
        form = NewReportForm(field=NewReportField.LEVEL)
        for _ in range(10):
            form.right()
        assert form.level == "P5"
        for _ in range(10):
            form.left()
        assert form.level == "P1"

        form.field = NewReportField.FREQUENCY
        for _ in range(5):
            form.right()
        assert form.frequency == "monthly"
        for _ in range(5):
            form.left()
        assert form.frequency == "weekly"

    def test_text_only_in_text_fields(self):
        form = NewReportForm()
        form.type_char("x")
        assert form.name == "" and form.title == ""

        form.field = NewReportField.NAME
        for char in "Ana":
            form.type_char(char)
        form.backspace()
        form.field = NewReportField.TITLE
        form.type_char("Q")
        form.field = NewReportField.LEVEL
        form.backspace()
        assert form.name == "An"
        assert form.title == "Q"
        assert form.is_valid


def test_entry_form_defaults():
    form = EntryForm()
    assert form.mood is None
    assert form.context is Context.STANDUP
    assert form.notes == ""


def test_cadence_index():
    assert cadence_index("weekly") == 0
    assert cadence_index(" Monthly ") == 2
    assert cadence_index("quarterly") == 1
