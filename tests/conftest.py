"""Shared fixtures: throwaway workspaces written to tmp_path."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from rapport.storage.workspace import init_workspace


def _write(path: Path, header: dict, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    yaml_text = yaml.safe_dump(header, sort_keys=False)
    path.write_text(f"---\n{yaml_text}---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def workspace_path(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    init_workspace(path)
    return path


@pytest.fixture
def make_report(workspace_path: Path) -> Callable[..., Path]:
    """Write ``<workspace>/<slug>/_profile.md`` and return the report dir.

    Pass ``parent`` to create a second-level report under a manager.
    """

    def _make(slug: str, name: str, parent: Path | None = None, **fields) -> Path:
        base = parent / "team" if parent is not None else workspace_path
        header = {"name": name, "meeting_frequency": "biweekly", **fields}
        report_dir = base / slug
        _write(report_dir / "_profile.md", header, f"# {name}\n")
        return report_dir

    return _make


@pytest.fixture
def make_entry() -> Callable[..., Path]:
    """Write an entry file named ``<stamp>.md``.

    ``legacy=True`` places it in the report root instead of ``journal/``.
    """

    def _make(
        report_dir: Path,
        stamp: str,
        mood: int | None = None,
        context: str | None = None,
        body: str = "",
        legacy: bool = False,
    ) -> Path:
        header: dict = {}
        if mood is not None:
            header["mood"] = mood
        if context is not None:
            header["context"] = context
        directory = report_dir if legacy else report_dir / "journal"
        return _write(directory / f"{stamp}.md", header, body)

    return _make
