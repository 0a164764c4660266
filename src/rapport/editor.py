"""External editor integration."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_FALLBACK_EDITORS = ("nano", "vim", "vi")


class EditorError(Exception):
    """Raised when the editor cannot be started or exits with an error."""


@dataclass
class EditorResult:
    modified: bool
    content: str | None = None  # file content after editing, when modified


def get_editor(override: str | None = None) -> str:
    """Resolve the editor command: override, $EDITOR, $VISUAL, then PATH."""
    for candidate in (override, os.environ.get("EDITOR"), os.environ.get("VISUAL")):
        if candidate and candidate.strip():
            return candidate
    for name in _FALLBACK_EDITORS:
        if shutil.which(name):
            return name
    return "vi"


def _mtime(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


def edit_file(path: Path, editor: str | None = None) -> EditorResult:
    """Open ``path`` in the editor and block until it exits.

    Args:
        path: File to edit. It does not need to exist yet.
        editor: Editor command, possibly with arguments (e.g. ``"code -w"``).

    Returns:
        Whether the file changed, and its content if it did.
    """
    command = shlex.split(get_editor(editor))
    if not command:
        raise EditorError("Empty editor command")

    before = _mtime(path)
    logger.debug("Running editor: %s %s", command, path)
    try:
        result = subprocess.run([*command, str(path)])
    except OSError as e:
        raise EditorError(f"Failed to start editor {command[0]}: {e}") from e

    if result.returncode != 0:
        raise EditorError(f"Editor exited with status {result.returncode}")

    after = _mtime(path)
    if after is None or after == before:
        return EditorResult(modified=False)

    return EditorResult(modified=True, content=path.read_text(encoding="utf-8"))
