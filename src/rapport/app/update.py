"""The update function: one event in, model mutated, effect out.

Every event is looked up in a dispatch table. An event that makes no sense
in the current mode is ignored. Storage failures from user actions become
status messages and leave the model as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from rapport.app.events import (
    NO_EFFECT,
    ArchiveReport,
    Back,
    Backspace,
    CancelModal,
    ConfirmDelete,
    CreateReport,
    CycleEntryContext,
    EditMeeting,
    EditMeetingFromList,
    Effect,
    Enter,
    Event,
    HideHelp,
    Input,
    ModalLeft,
    ModalNextField,
    ModalPrevField,
    ModalRight,
    NewMeeting,
    Quit,
    RefreshData,
    SaveEntry,
    SelectFirst,
    SelectLast,
    SelectNext,
    SelectPrev,
    SetEntryMood,
    ShowDeleteConfirm,
    ShowEntryInput,
    ShowHelp,
    ShowNewReport,
    SpawnEditor,
    UpdateMood,
    ViewMeeting,
    ViewReport,
)
from rapport.app.forms import NewReportForm, cadence_index
from rapport.app.state import (
    DashboardMode,
    DeleteConfirmMode,
    EntryInputMode,
    HelpMode,
    Mode,
    Model,
    NewReportMode,
    NoteViewerMode,
    ReportDetailMode,
    ReportRecord,
    delete_entry,
    recompute,
    reload,
)
from rapport.model.entry import JournalEntry, valid_mood
from rapport.model.report import ManagerInfo, ReportProfile
from rapport.storage.errors import StorageError
from rapport.storage.journal import create_entry, create_meeting, update_entry_mood
from rapport.storage.profiles import archive_report, create_report

logger = logging.getLogger(__name__)

Handler = Callable[[Model, Event], Effect]


def apply(model: Model, event: Event) -> Effect:
    """Apply one event to the model and return the effect to run."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return NO_EFFECT
    return handler(model, event)


def _record(model: Model, index: int) -> ReportRecord | None:
    if 0 <= index < len(model.records):
        return model.records[index]
    return None


def _insert_entry(record: ReportRecord, entry: JournalEntry) -> int:
    """Add an entry keeping timestamp order; returns its index."""
    record.entries.append(entry)
    record.entries.sort(key=lambda e: e.timestamp)
    return record.entries.index(entry)


# Navigation


def _quit(model: Model, event: Event) -> Effect:
    model.should_quit = True
    return NO_EFFECT


def _back(model: Model, event: Event) -> Effect:
    mode = model.mode
    if isinstance(mode, ReportDetailMode):
        model.mode = DashboardMode()
        model.selected_index = mode.report_index
    elif isinstance(mode, NoteViewerMode):
        model.mode = ReportDetailMode(mode.report_index)
    elif isinstance(mode, HelpMode):
        model.mode = mode.previous
    else:
        _cancel_modal(model, event)
    return NO_EFFECT


def _show_help(model: Model, event: Event) -> Effect:
    if not isinstance(model.mode, HelpMode):
        model.mode = HelpMode(previous=model.mode)
    return NO_EFFECT


def _hide_help(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, HelpMode):
        model.mode = model.mode.previous
    return NO_EFFECT


def _select_next(model: Model, event: Event) -> Effect:
    length = model.current_list_len()
    if length:
        model.selected_index = (model.selected_index + 1) % length
    return NO_EFFECT


def _select_prev(model: Model, event: Event) -> Effect:
    length = model.current_list_len()
    if length:
        model.selected_index = (model.selected_index - 1) % length
    return NO_EFFECT


def _select_first(model: Model, event: Event) -> Effect:
    if model.current_list_len():
        model.selected_index = 0
    return NO_EFFECT


def _select_last(model: Model, event: Event) -> Effect:
    length = model.current_list_len()
    if length:
        model.selected_index = length - 1
    return NO_EFFECT


def _view_report(model: Model, event: Event) -> Effect:
    if not isinstance(model.mode, DashboardMode) or not model.records:
        return NO_EFFECT
    index = min(model.selected_index, len(model.records) - 1)
    model.mode = ReportDetailMode(index)
    model.selected_index = 0
    return NO_EFFECT


def _view_meeting(model: Model, event: ViewMeeting) -> Effect:
    mode = model.mode
    if not isinstance(mode, ReportDetailMode):
        return NO_EFFECT
    entry_index = model.meeting_display_to_entry_index(event.display_index)
    if entry_index is None:
        return NO_EFFECT
    entry = model.records[mode.report_index].entries[entry_index]
    model.mode = NoteViewerMode(
        mode.report_index, entry_index, content=entry.content, mood=entry.mood
    )
    return NO_EFFECT


# Meetings


def _new_meeting(model: Model, event: Event) -> Effect:
    mode = model.mode
    if not isinstance(mode, ReportDetailMode):
        return NO_EFFECT
    record = _record(model, mode.report_index)
    if record is None:
        return NO_EFFECT

    try:
        meeting = create_meeting(record.report.path)
    except (StorageError, OSError) as e:
        model.set_status(f"Error: {e}")
        return NO_EFFECT

    entry_index = _insert_entry(record, meeting)
    recompute(model, record)
    model.selected_index = 0
    model.mode = NoteViewerMode(
        mode.report_index, entry_index, content=meeting.content, mood=None
    )
    return SpawnEditor(meeting.path, is_new=True)


def _edit_meeting(model: Model, event: Event) -> Effect:
    mode = model.mode
    if not isinstance(mode, NoteViewerMode):
        return NO_EFFECT
    entry = model.records[mode.report_index].entries[mode.entry_index]
    return SpawnEditor(entry.path, is_new=False)


def _edit_meeting_from_list(model: Model, event: EditMeetingFromList) -> Effect:
    mode = model.mode
    if not isinstance(mode, ReportDetailMode):
        return NO_EFFECT
    entry_index = model.meeting_display_to_entry_index(event.display_index)
    if entry_index is None:
        return NO_EFFECT
    entry = model.records[mode.report_index].entries[entry_index]
    return SpawnEditor(entry.path, is_new=False)


def _update_mood(model: Model, event: UpdateMood) -> Effect:
    mode = model.mode
    if not isinstance(mode, NoteViewerMode):
        return NO_EFFECT
    record = model.records[mode.report_index]

    try:
        updated = update_entry_mood(record.entries[mode.entry_index], event.mood)
    except (StorageError, OSError) as e:
        model.set_status(f"Error saving mood: {e}")
        return NO_EFFECT

    record.entries[mode.entry_index] = updated
    mode.mood = updated.mood
    recompute(model, record)
    model.set_status("Mood updated")
    return NO_EFFECT


# Deletion


def _show_delete_confirm(model: Model, event: Event) -> Effect:
    mode = model.mode
    if isinstance(mode, NoteViewerMode):
        model.mode = DeleteConfirmMode(
            mode.report_index, mode.entry_index, from_list=False, previous=mode
        )
    elif isinstance(mode, ReportDetailMode):
        entry_index = model.meeting_display_to_entry_index(model.selected_index)
        if entry_index is not None:
            model.mode = DeleteConfirmMode(
                mode.report_index, entry_index, from_list=True, previous=mode
            )
    return NO_EFFECT


def _confirm_delete(model: Model, event: Event) -> Effect:
    mode = model.mode
    if not isinstance(mode, DeleteConfirmMode):
        return NO_EFFECT

    try:
        delete_entry(model, mode.report_index, mode.entry_index)
    except (StorageError, OSError) as e:
        model.set_status(f"Error deleting entry: {e}")
        return NO_EFFECT

    model.mode = ReportDetailMode(mode.report_index)
    model.clamp_selection()
    model.set_status("Entry deleted")
    return NO_EFFECT


# Reports


def _show_new_report(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, DashboardMode):
        form = NewReportForm(
            frequency_index=cadence_index(model.workspace.default_meeting_frequency)
        )
        model.mode = NewReportMode(form=form, previous=model.mode)
    return NO_EFFECT


def _create_report(model: Model, event: Event) -> Effect:
    mode = model.mode
    if not isinstance(mode, NewReportMode):
        return NO_EFFECT
    form = mode.form
    if not form.is_valid:
        model.set_status("Name and Title are required")
        return NO_EFFECT

    name = form.name.strip()
    profile = ReportProfile(
        name=name,
        title=form.title.strip(),
        start_date=model.today or date.today(),
        level=form.level,
        meeting_frequency=form.frequency,
        active=True,
        report_type=form.report_type,
        manager_info=ManagerInfo() if form.report_type.is_manager else None,
    )
    type_label = "manager" if form.report_type.is_manager else "IC"

    model.mode = DashboardMode()
    try:
        report = create_report(model.workspace.path, name, profile)
        reload(model)
    except (StorageError, OSError) as e:
        model.set_status(f"Error: {e}")
        model.clamp_selection()
        return NO_EFFECT

    slugs = [r.report.slug for r in model.records]
    if report.slug in slugs:
        model.selected_index = slugs.index(report.slug)
    model.clamp_selection()
    model.set_status(f"Recruited {name} ({type_label})")
    return NO_EFFECT


def _archive_report(model: Model, event: Event) -> Effect:
    if not isinstance(model.mode, DashboardMode):
        return NO_EFFECT
    record = _record(model, model.selected_index)
    if record is None:
        return NO_EFFECT
    if not record.report.profile.active:
        model.set_status(f"{record.report.name} is already archived")
        return NO_EFFECT

    try:
        record.report = archive_report(record.report)
    except (StorageError, OSError) as e:
        model.set_status(f"Error: {e}")
        return NO_EFFECT

    recompute(model, record)
    model.set_status(f"Archived {record.report.name}")
    return NO_EFFECT


# Modals


def _cancel_modal(model: Model, event: Event) -> Effect:
    mode = model.mode
    if isinstance(mode, (NewReportMode, DeleteConfirmMode)):
        model.mode = mode.previous
    elif isinstance(mode, EntryInputMode):
        model.mode = ReportDetailMode(mode.report_index)
    return NO_EFFECT


def _modal_left(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, NewReportMode):
        model.mode.form.left()
    return NO_EFFECT


def _modal_right(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, NewReportMode):
        model.mode.form.right()
    return NO_EFFECT


def _modal_next_field(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, NewReportMode):
        model.mode.form.next_field()
    return NO_EFFECT


def _modal_prev_field(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, NewReportMode):
        model.mode.form.prev_field()
    return NO_EFFECT


def _show_entry_input(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, ReportDetailMode):
        model.mode = EntryInputMode(model.mode.report_index)
    return NO_EFFECT


def _set_entry_mood(model: Model, event: SetEntryMood) -> Effect:
    if isinstance(model.mode, EntryInputMode) and valid_mood(event.mood) is not None:
        model.mode.form.mood = event.mood
    return NO_EFFECT


def _cycle_entry_context(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, EntryInputMode):
        form = model.mode.form
        form.context = form.context.next()
    return NO_EFFECT


def _save_entry(model: Model, event: Event) -> Effect:
    mode = model.mode
    if not isinstance(mode, EntryInputMode):
        return NO_EFFECT
    record = _record(model, mode.report_index)
    if record is None:
        return NO_EFFECT

    form = mode.form
    try:
        entry = create_entry(record.report.path, form.mood, form.context, form.notes)
    except (StorageError, OSError) as e:
        model.set_status(f"Error: {e}")
    else:
        _insert_entry(record, entry)
        recompute(model, record)
        model.set_status("Observation recorded")

    model.mode = ReportDetailMode(mode.report_index)
    model.clamp_selection()
    return NO_EFFECT


# Text input


def _input(model: Model, event: Input) -> Effect:
    mode = model.mode
    if isinstance(mode, NewReportMode):
        mode.form.type_char(event.char)
    elif isinstance(mode, EntryInputMode):
        mode.form.notes += event.char
    return NO_EFFECT


def _backspace(model: Model, event: Event) -> Effect:
    mode = model.mode
    if isinstance(mode, NewReportMode):
        mode.form.backspace()
    elif isinstance(mode, EntryInputMode):
        mode.form.notes = mode.form.notes[:-1]
    return NO_EFFECT


def _enter(model: Model, event: Event) -> Effect:
    if isinstance(model.mode, NewReportMode):
        return _create_report(model, event)
    return NO_EFFECT


# Refresh


def _rebind(mode: Mode, index_by_slug: dict[str, int], old_slugs: list[str]) -> Mode:
    """Point ``mode`` at the same report after the record list was rebuilt."""
    if isinstance(mode, HelpMode):
        return HelpMode(previous=_rebind(mode.previous, index_by_slug, old_slugs))
    if isinstance(mode, NewReportMode):
        previous = _rebind(mode.previous, index_by_slug, old_slugs)
        return NewReportMode(form=mode.form, previous=previous)

    old_index = getattr(mode, "report_index", None)
    if old_index is None:
        return mode
    slug = old_slugs[old_index] if 0 <= old_index < len(old_slugs) else None
    new_index = index_by_slug.get(slug) if slug else None
    if new_index is None:
        return DashboardMode()
    if isinstance(mode, EntryInputMode):
        return EntryInputMode(new_index, form=mode.form)
    return ReportDetailMode(new_index)


def _refresh(model: Model, event: Event) -> Effect:
    old_slugs = [r.report.slug for r in model.records]
    try:
        reload(model)
    except (StorageError, OSError) as e:
        model.set_status(f"Error: {e}")
        return NO_EFFECT

    index_by_slug = {r.report.slug: i for i, r in enumerate(model.records)}
    model.mode = _rebind(model.mode, index_by_slug, old_slugs)
    model.clamp_selection()
    logger.info("Reloaded %d reports", len(model.records))
    return NO_EFFECT


_HANDLERS: dict[type, Handler] = {
    Quit: _quit,
    Back: _back,
    ShowHelp: _show_help,
    HideHelp: _hide_help,
    SelectNext: _select_next,
    SelectPrev: _select_prev,
    SelectFirst: _select_first,
    SelectLast: _select_last,
    ViewReport: _view_report,
    ViewMeeting: _view_meeting,
    NewMeeting: _new_meeting,
    EditMeeting: _edit_meeting,
    EditMeetingFromList: _edit_meeting_from_list,
    UpdateMood: _update_mood,
    ShowDeleteConfirm: _show_delete_confirm,
    ConfirmDelete: _confirm_delete,
    ShowNewReport: _show_new_report,
    CreateReport: _create_report,
    ArchiveReport: _archive_report,
    CancelModal: _cancel_modal,
    ModalLeft: _modal_left,
    ModalRight: _modal_right,
    ModalNextField: _modal_next_field,
    ModalPrevField: _modal_prev_field,
    ShowEntryInput: _show_entry_input,
    SetEntryMood: _set_entry_mood,
    CycleEntryContext: _cycle_entry_context,
    SaveEntry: _save_entry,
    RefreshData: _refresh,
    Input: _input,
    Backspace: _backspace,
    Enter: _enter,
}
