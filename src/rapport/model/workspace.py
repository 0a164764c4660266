"""Workspace settings, stored in the ``.rapport`` file at the workspace root."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

WORKSPACE_VERSION = 1


@dataclass
class WorkspaceSettings:
    default_meeting_frequency: str = "biweekly"
    overdue_threshold_days: int = 3
    default_2nd_level_frequency: str = "monthly"


@dataclass
class WorkspaceConfig:
    version: int = WORKSPACE_VERSION
    settings: WorkspaceSettings = field(default_factory=WorkspaceSettings)


@dataclass
class Workspace:
    path: Path
    config: WorkspaceConfig = field(default_factory=WorkspaceConfig)

    @property
    def overdue_threshold_days(self) -> int:
        return self.config.settings.overdue_threshold_days

    @property
    def default_meeting_frequency(self) -> str:
        return self.config.settings.default_meeting_frequency

    @property
    def default_2nd_level_frequency(self) -> str:
        return self.config.settings.default_2nd_level_frequency
