"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from rapport.cli import main
from rapport.storage.workspace import is_workspace


def test_init(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    target = tmp_path / "team"
    assert main(["init", str(target)]) == 0
    assert is_workspace(target)
    assert "Initialized rapport workspace" in capsys.readouterr().out


def test_init_twice_fails(workspace_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["init", str(workspace_path)]) == 1
    assert "already exists" in capsys.readouterr().err


def test_summary(
    workspace_path: Path, make_report, make_entry, capsys: pytest.CaptureFixture[str]
):
    alex = make_report("alex-chen", "Alex Chen", level="P3")
    make_entry(alex, "2026-03-10T100000", mood=4, context="meeting", body="ok")
    manager = make_report("chris-wong", "Chris Wong", report_type="manager")
    make_report("robin-patel", "Robin Patel", parent=manager)

    assert main(["summary", str(workspace_path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Name")
    assert lines[1].startswith("Chris Wong *")
    assert lines[2].startswith("  Robin Patel")
    assert lines[3].startswith("Alex Chen")
    assert "3 people total" in lines[-1]


def test_summary_not_a_workspace(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["summary", str(tmp_path)]) == 1
    assert "Not a rapport workspace" in capsys.readouterr().err


def test_run_is_default(workspace_path: Path, tmp_path: Path):
    config = tmp_path / "config.toml"
    config.write_text(f'log_file = "{tmp_path / "rapport.log"}"\n')
    with patch("rapport.tui.runner.run") as run:
        assert main([str(workspace_path), "--config", str(config)]) == 0

    model, loaded_config = run.call_args.args
    assert model.workspace.path == workspace_path.resolve()
    assert loaded_config.log_file == tmp_path / "rapport.log"


def test_run_not_a_workspace(tmp_path: Path):
    config = tmp_path / "config.toml"
    config.write_text(f'log_file = "{tmp_path / "rapport.log"}"\n')
    with patch("rapport.tui.runner.run") as run:
        assert main(["run", str(tmp_path / "missing"), "--config", str(config)]) == 1
    run.assert_not_called()


def test_summary_bad_workspace_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    (tmp_path / ".rapport").write_text("version: abc\n")
    assert main(["summary", str(tmp_path)]) == 1
    assert "Invalid version" in capsys.readouterr().err
