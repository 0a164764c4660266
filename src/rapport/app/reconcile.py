"""Fold the outcome of an external edit back into the model."""

from __future__ import annotations

import logging
from pathlib import Path

from rapport.app.state import (
    Model,
    NoteViewerMode,
    ReportDetailMode,
    delete_entry,
    recompute,
)
from rapport.editor import EditorResult
from rapport.storage.errors import StorageError
from rapport.storage.journal import reload_entry

logger = logging.getLogger(__name__)


def _locate(model: Model, path: Path) -> tuple[int, int] | None:
    for report_index, record in enumerate(model.records):
        for entry_index, entry in enumerate(record.entries):
            if entry.path == path:
                return report_index, entry_index
    return None


def reconcile_edit(
    model: Model, path: Path, result: EditorResult, is_new: bool = False
) -> None:
    """Apply an editor result for the entry stored at ``path``.

    An unmodified file changes nothing. A file whose body is left empty is
    treated as a discarded entry and deleted.
    """
    if not result.modified:
        return

    located = _locate(model, path)
    if located is None:
        logger.warning("Edited file %s is not a loaded entry", path)
        return
    report_index, entry_index = located
    record = model.records[report_index]

    try:
        entry = reload_entry(record.entries[entry_index])
        if not entry.content.strip():
            delete_entry(model, report_index, entry_index)
            model.mode = ReportDetailMode(report_index)
            model.clamp_selection()
            model.set_status("Entry discarded")
            logger.info("Discarded %s entry %s", "new" if is_new else "edited", path)
            return
    except (StorageError, OSError) as e:
        model.set_status(f"Error: {e}")
        return

    record.entries[entry_index] = entry
    mode = model.mode
    if (
        isinstance(mode, NoteViewerMode)
        and mode.report_index == report_index
        and mode.entry_index == entry_index
    ):
        mode.content = entry.content
        mode.mood = entry.mood
    recompute(model, record)
    model.clamp_selection()
