"""Tests for the external editor wrapper."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from rapport.editor import EditorError, edit_file, get_editor


class TestGetEditor:
    def test_override_wins(self):
        with patch.dict(os.environ, {"EDITOR": "vim", "VISUAL": "code"}):
            assert get_editor("hx") == "hx"

    def test_editor_then_visual(self):
        with patch.dict(os.environ, {"EDITOR": "vim", "VISUAL": "code"}):
            assert get_editor() == "vim"
        with patch.dict(os.environ, {"EDITOR": "", "VISUAL": "code"}):
            assert get_editor() == "code"

    def test_path_fallback(self):
        with patch.dict(os.environ, {"EDITOR": "", "VISUAL": ""}):
            with patch("shutil.which", side_effect=lambda name: name == "vim" or None):
                assert get_editor() == "vim"
            with patch("shutil.which", return_value=None):
                assert get_editor() == "vi"


def _fake_editor(new_text: str | None, returncode: int = 0):
    """A subprocess.run stand-in that optionally rewrites the file."""

    def run(command, *args, **kwargs):
        path = Path(command[-1])
        if new_text is not None:
            path.write_text(new_text)
            stat = path.stat()
            os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
        return subprocess.CompletedProcess(command, returncode)

    return run


class TestEditFile:
    def test_modified(self, tmp_path: Path):
        path = tmp_path / "note.md"
        path.write_text("before")
        with patch("subprocess.run", side_effect=_fake_editor("after")) as run:
            result = edit_file(path, editor="code --wait")

        assert run.call_args.args[0] == ["code", "--wait", str(path)]
        assert result.modified is True
        assert result.content == "after"

    def test_unmodified(self, tmp_path: Path):
        path = tmp_path / "note.md"
        path.write_text("before")
        with patch("subprocess.run", side_effect=_fake_editor(None)):
            result = edit_file(path, editor="vi")
        assert result.modified is False
        assert result.content is None

    def test_non_zero_exit(self, tmp_path: Path):
        path = tmp_path / "note.md"
        path.write_text("before")
        with patch("subprocess.run", side_effect=_fake_editor(None, returncode=1)):
            with pytest.raises(EditorError, match="status 1"):
                edit_file(path, editor="vi")

    def test_missing_binary(self, tmp_path: Path):
        path = tmp_path / "note.md"
        path.write_text("before")
        with patch("subprocess.run", side_effect=FileNotFoundError("no such file")):
            with pytest.raises(EditorError, match="Failed to start"):
                edit_file(path, editor="nonexistent-editor")
