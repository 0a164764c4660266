"""Map curses key presses to application events."""

from __future__ import annotations

import curses

from rapport.app import events as ev
from rapport.app.state import (
    DashboardMode,
    DeleteConfirmMode,
    EntryInputMode,
    HelpMode,
    Model,
    NewReportMode,
    NoteViewerMode,
    ReportDetailMode,
)

Key = int | str

CTRL_C = "\x03"
CTRL_Q = "\x11"
CTRL_R = "\x12"
ESC = "\x1b"
TAB = "\t"

ENTER_KEYS = ("\n", "\r", curses.KEY_ENTER)
BACKSPACE_KEYS = ("\x7f", "\x08", curses.KEY_BACKSPACE)
DELETE_KEYS = (curses.KEY_DC,)
MOOD_F_KEYS = {curses.KEY_F0 + n: n for n in range(1, 6)}

_NAVIGATION = {
    curses.KEY_DOWN: ev.SelectNext(),
    "j": ev.SelectNext(),
    curses.KEY_UP: ev.SelectPrev(),
    "k": ev.SelectPrev(),
    "g": ev.SelectFirst(),
    curses.KEY_HOME: ev.SelectFirst(),
    "G": ev.SelectLast(),
    curses.KEY_END: ev.SelectLast(),
}


def _dashboard(model: Model, key: Key) -> ev.Event | None:
    if key in _NAVIGATION:
        return _NAVIGATION[key]
    if key in ENTER_KEYS or key in (" ", curses.KEY_RIGHT, "l"):
        return ev.ViewReport()
    simple = {
        "n": ev.ShowNewReport(),
        "a": ev.ArchiveReport(),
        "?": ev.ShowHelp(),
        "r": ev.RefreshData(),
        "q": ev.Quit(),
    }
    return simple.get(key)


def _report_detail(model: Model, key: Key) -> ev.Event | None:
    if key in _NAVIGATION:
        return _NAVIGATION[key]
    if key == ESC or key in BACKSPACE_KEYS or key in (curses.KEY_LEFT, "h"):
        return ev.Back()
    if key in ENTER_KEYS or key in (curses.KEY_RIGHT, "l"):
        if model.selected_index < model.selected_meeting_count:
            return ev.ViewMeeting(model.selected_index)
        return None
    if key == "e":
        return ev.EditMeetingFromList(model.selected_index)
    if key in DELETE_KEYS:
        return ev.ShowDeleteConfirm()
    simple = {
        "n": ev.NewMeeting(),
        "m": ev.ShowEntryInput(),
        "?": ev.ShowHelp(),
        "q": ev.Quit(),
    }
    return simple.get(key)


def _note_viewer(model: Model, key: Key) -> ev.Event | None:
    if key == ESC or key in BACKSPACE_KEYS or key in (curses.KEY_LEFT, "h"):
        return ev.Back()
    if key in DELETE_KEYS:
        return ev.ShowDeleteConfirm()
    if key in MOOD_F_KEYS:
        return ev.UpdateMood(MOOD_F_KEYS[key])
    simple = {
        "e": ev.EditMeeting(),
        "?": ev.ShowHelp(),
        "q": ev.Quit(),
    }
    return simple.get(key)


def _delete_confirm(model: Model, key: Key) -> ev.Event | None:
    if key in ENTER_KEYS or key in ("y", "Y"):
        return ev.ConfirmDelete()
    if key in (ESC, "n", "N"):
        return ev.CancelModal()
    return None


def _new_report(model: Model, key: Key) -> ev.Event | None:
    mode = model.mode
    if key == ESC:
        return ev.CancelModal()
    if key in ENTER_KEYS:
        return ev.Enter()
    if key in BACKSPACE_KEYS:
        return ev.Backspace()
    if key == curses.KEY_LEFT:
        return ev.ModalLeft()
    if key == curses.KEY_RIGHT:
        return ev.ModalRight()
    if key == curses.KEY_UP or key == curses.KEY_BTAB:
        return ev.ModalPrevField()
    if key in (curses.KEY_DOWN, TAB):
        return ev.ModalNextField()

    # vim keys only move around when the focused field is not a text box
    if isinstance(mode, NewReportMode) and not mode.form.field.is_text:
        vim = {
            "h": ev.ModalLeft(),
            "l": ev.ModalRight(),
            "k": ev.ModalPrevField(),
            "j": ev.ModalNextField(),
        }
        if key in vim:
            return vim[key]
    if isinstance(key, str) and key.isprintable():
        return ev.Input(key)
    return None


def _entry_input(model: Model, key: Key) -> ev.Event | None:
    if key == ESC:
        return ev.CancelModal()
    if key in ("1", "2", "3", "4", "5"):
        return ev.SetEntryMood(int(key))
    if key == TAB:
        return ev.CycleEntryContext()
    if key in ENTER_KEYS:
        return ev.SaveEntry()
    if key in BACKSPACE_KEYS:
        return ev.Backspace()
    if isinstance(key, str) and key.isprintable():
        return ev.Input(key)
    return None


def _help(model: Model, key: Key) -> ev.Event | None:
    if key in (ESC, "q", "?"):
        return ev.HideHelp()
    return None


_MODE_KEYMAPS = {
    DashboardMode: _dashboard,
    ReportDetailMode: _report_detail,
    NoteViewerMode: _note_viewer,
    DeleteConfirmMode: _delete_confirm,
    NewReportMode: _new_report,
    EntryInputMode: _entry_input,
    HelpMode: _help,
}


def key_to_event(model: Model, key: Key) -> ev.Event | None:
    """Translate one key press into an event for the current mode."""
    if key in (CTRL_C, CTRL_Q):
        return ev.Quit()
    if key == CTRL_R:
        return ev.RefreshData()
    return _MODE_KEYMAPS[type(model.mode)](model, key)
