"""Configuration management for rapport."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "rapport"


@dataclass
class Config:
    workspace: Path = field(default_factory=lambda: Path("."))
    editor: str | None = None  # overrides $EDITOR / $VISUAL
    status_seconds: float = 3.0  # how long status messages stay visible
    poll_interval_ms: int = 100
    log_file: Path = field(
        default_factory=lambda: _DEFAULT_CONFIG_DIR / "rapport.log"
    )
    verbose: bool = False

    @classmethod
    def load(
        cls, overrides: dict | None = None, config_path: Path | None = None
    ) -> Config:
        """Load config from TOML file, then apply CLI overrides."""
        config = cls()

        path = config_path or _DEFAULT_CONFIG_DIR / "config.toml"
        if path.exists():
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = cls._apply_dict(config, data)

        if overrides:
            config = cls._apply_dict(config, overrides)

        return config

    @classmethod
    def _apply_dict(cls, config: Config, data: dict) -> Config:
        if "workspace" in data:
            config.workspace = Path(data["workspace"]).expanduser()
        if "editor" in data:
            config.editor = str(data["editor"]) or None
        if "status_seconds" in data:
            config.status_seconds = float(data["status_seconds"])
        if "poll_interval_ms" in data:
            config.poll_interval_ms = int(data["poll_interval_ms"])
        if "log_file" in data:
            config.log_file = Path(data["log_file"]).expanduser()
        if "verbose" in data:
            config.verbose = bool(data["verbose"])
        return config
