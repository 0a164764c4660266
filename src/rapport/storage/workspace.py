"""Workspace discovery, loading and directory listing."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from rapport.model.workspace import (
    WORKSPACE_VERSION,
    Workspace,
    WorkspaceConfig,
    WorkspaceSettings,
)
from rapport.storage.errors import InvalidWorkspaceError

logger = logging.getLogger(__name__)

WORKSPACE_FILE = ".rapport"
PROFILE_FILE = "_profile.md"
TEAM_DIR = "team"


def is_workspace(path: Path) -> bool:
    return (path / WORKSPACE_FILE).exists()


def find_workspace(start: Path) -> Path | None:
    """Walk up from ``start`` to the nearest workspace root."""
    start = start.resolve()
    for candidate in (start, *start.parents):
        if is_workspace(candidate):
            return candidate
    return None


def _config_from_dict(data: dict) -> WorkspaceConfig:
    settings_data = data.get("settings") or {}
    if not isinstance(settings_data, dict):
        raise InvalidWorkspaceError("'settings' must be a mapping")

    settings = WorkspaceSettings()
    frequency = settings_data.get(
        "default_meeting_frequency", settings_data.get("default_cadence")
    )
    if frequency:
        settings.default_meeting_frequency = str(frequency)
    if "overdue_threshold_days" in settings_data:
        try:
            settings.overdue_threshold_days = int(settings_data["overdue_threshold_days"])
        except (TypeError, ValueError) as e:
            raise InvalidWorkspaceError(f"Invalid overdue_threshold_days: {e}") from e
    if settings_data.get("default_2nd_level_frequency"):
        settings.default_2nd_level_frequency = str(
            settings_data["default_2nd_level_frequency"]
        )

    try:
        version = int(data.get("version", WORKSPACE_VERSION))
    except (TypeError, ValueError) as e:
        raise InvalidWorkspaceError(f"Invalid version: {e}") from e

    return WorkspaceConfig(version=version, settings=settings)


def _render_config(config: WorkspaceConfig) -> str:
    data = {
        "version": config.version,
        "settings": {
            "default_meeting_frequency": config.settings.default_meeting_frequency,
            "overdue_threshold_days": config.settings.overdue_threshold_days,
            "default_2nd_level_frequency": config.settings.default_2nd_level_frequency,
        },
    }
    return "# rapport workspace\n" + yaml.safe_dump(data, sort_keys=False)


def load_workspace(path: Path) -> Workspace:
    config_path = path / WORKSPACE_FILE
    if not config_path.exists():
        raise InvalidWorkspaceError(f"No {WORKSPACE_FILE} file found in {path}")

    content = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(content) if content.strip() else None
    except yaml.YAMLError as e:
        raise InvalidWorkspaceError(f"Invalid {WORKSPACE_FILE}: {e}") from e

    if data is None:
        config = WorkspaceConfig()
    elif isinstance(data, dict):
        config = _config_from_dict(data)
    else:
        raise InvalidWorkspaceError(f"{WORKSPACE_FILE} must be a mapping")

    logger.debug("Loaded workspace %s (version %d)", path, config.version)
    return Workspace(path=path, config=config)


def init_workspace(path: Path) -> Workspace:
    config_path = path / WORKSPACE_FILE
    if config_path.exists():
        raise InvalidWorkspaceError(f"Workspace already exists at {path}")

    path.mkdir(parents=True, exist_ok=True)
    workspace = Workspace(path=path)
    save_workspace(workspace)
    logger.info("Initialized workspace at %s", path)
    return workspace


def save_workspace(workspace: Workspace) -> None:
    (workspace.path / WORKSPACE_FILE).write_text(
        _render_config(workspace.config), encoding="utf-8"
    )


def _profile_dirs(parent: Path) -> list[Path]:
    if not parent.is_dir():
        return []
    return sorted(
        p for p in parent.iterdir()
        if p.is_dir() and not p.name.startswith(".") and (p / PROFILE_FILE).exists()
    )


def list_report_dirs(workspace: Workspace) -> list[Path]:
    """Direct-report directories (non-hidden, holding a profile), sorted."""
    return _profile_dirs(workspace.path)


def list_team_member_dirs(manager_path: Path) -> list[Path]:
    """Second-level report directories under a manager's ``team/`` folder."""
    return _profile_dirs(manager_path / TEAM_DIR)


def has_team_dir(report_path: Path) -> bool:
    return (report_path / TEAM_DIR).is_dir()
