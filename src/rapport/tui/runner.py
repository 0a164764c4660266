"""Main loop: poll a key, apply the event, run the effect, redraw."""

from __future__ import annotations

import curses
import logging

from rapport.app.events import SpawnEditor
from rapport.app.reconcile import reconcile_edit
from rapport.app.state import Model
from rapport.app.update import apply
from rapport.config import Config
from rapport.editor import EditorError, edit_file
from rapport.tui.keys import key_to_event
from rapport.tui.render import draw, init_colors

logger = logging.getLogger(__name__)

ESC_DELAY_MS = 25


def _read_key(stdscr):
    try:
        return stdscr.get_wch()
    except curses.error:
        return None  # poll timed out


def _run_editor(stdscr, model: Model, effect: SpawnEditor, config: Config) -> None:
    """Hand the terminal to the editor, then fold its result into the model."""
    curses.def_prog_mode()
    curses.endwin()
    try:
        result = edit_file(effect.path, config.editor)
    except EditorError as e:
        logger.error("Editor failed for %s: %s", effect.path, e)
        model.set_status(f"Error: {e}")
        return
    finally:
        curses.reset_prog_mode()
        stdscr.clear()

    reconcile_edit(model, effect.path, result, is_new=effect.is_new)


def _loop(stdscr, model: Model, config: Config) -> None:
    curses.raw()
    stdscr.keypad(True)
    stdscr.timeout(config.poll_interval_ms)
    try:
        curses.curs_set(0)
    except curses.error:
        pass  # terminal cannot hide the cursor
    curses.set_escdelay(ESC_DELAY_MS)
    init_colors()

    while not model.should_quit:
        model.clear_expired_status()
        draw(stdscr, model)
        key = _read_key(stdscr)
        if key is None:
            continue
        event = key_to_event(model, key)
        if event is None:
            continue
        logger.debug("Event %s in %s", event, model.mode.view.value)
        effect = apply(model, event)
        if isinstance(effect, SpawnEditor):
            _run_editor(stdscr, model, effect, config)


def run(model: Model, config: Config) -> None:
    """Run the interactive UI until the user quits."""
    curses.wrapper(_loop, model, config)
