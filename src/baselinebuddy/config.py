"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from baselinebuddy.errors import ConfigError

# Option file picked up from the scanned directory when none is given
PROJECT_CONFIG_NAME = ".baselinebuddy.yaml"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "baselinebuddy"
    return Path.home() / ".config" / "baselinebuddy"


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class BaselineConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    workers: int = 1
    max_files: int = 0
    web_host: str = "127.0.0.1"  # Loopback only
    web_port: int = 8471
    verbose: bool = False

    @property
    def user_options_file(self) -> Path:
        """Per-user option file, used when a project has none."""
        return self.config_dir / "options.yaml"

    def find_options_file(self, directory: str | Path) -> Path | None:
        """Project option file in directory, else the user's, else None."""
        candidate = Path(directory) / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        if self.user_options_file.is_file():
            return self.user_options_file
        return None

    @classmethod
    def load(cls) -> BaselineConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        workers = _env_int("BASELINE_WORKERS")
        if workers is not None:
            if workers < 1:
                raise ConfigError(f"BASELINE_WORKERS must be at least 1, got {workers}")
            config.workers = workers

        max_files = _env_int("BASELINE_MAX_FILES")
        if max_files is not None:
            if max_files < 0:
                raise ConfigError("BASELINE_MAX_FILES must not be negative")
            config.max_files = max_files

        port = _env_int("BASELINE_WEB_PORT")
        if port is not None:
            config.web_port = port

        return config
