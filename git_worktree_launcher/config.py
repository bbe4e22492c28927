"""Configuration handling for git-worktree-launcher"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import yaml

from git_worktree_launcher.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONFIG_HEADER,
    DEFAULT_WINDOWS,
)
from git_worktree_launcher.exceptions import ConfigError
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.models import TmuxWindow

logger = get_logger(__name__)


def default_windows() -> List[TmuxWindow]:
    """Window plan used when no config file exists yet."""
    return [TmuxWindow(name, command) for name, command in DEFAULT_WINDOWS]


def default_config_path() -> Path:
    """Location of the config file, honouring $XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / CONFIG_DIR_NAME / CONFIG_FILE_NAME


@dataclass
class Config:
    """Configuration for git-worktree-launcher with validation."""

    # Session window plan, first entry is the session's initial window
    windows: List[TmuxWindow] = field(default_factory=default_windows)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_windows()

    def _validate_windows(self):
        """Validate the window plan entries."""
        if not isinstance(self.windows, list):
            raise ValueError("windows must be a list")

        for window in self.windows:
            if not isinstance(window, TmuxWindow):
                raise ValueError(f"windows entries must be TmuxWindow, got {type(window).__name__}")
            if not isinstance(window.name, str) or not window.name.strip():
                raise ValueError("window name cannot be empty")
            if window.command is not None and not isinstance(window.command, str):
                raise ValueError(f"command for window '{window.name}' must be a string or null")
            window.name = window.name.strip()

    def to_dict(self) -> dict:
        """Convert config to a plain dictionary for serialization."""
        return {
            "windows": [
                {"name": window.name, "command": window.command}
                for window in self.windows
            ],
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        if not isinstance(config_dict, dict):
            raise ValueError("config must be a mapping")

        if "windows" not in config_dict:
            return cls()

        raw_windows = config_dict["windows"]
        if raw_windows is None:
            raw_windows = []
        if not isinstance(raw_windows, list):
            raise ValueError("windows must be a list")

        windows = []
        for entry in raw_windows:
            if not isinstance(entry, dict):
                raise ValueError(f"window entries must be mappings, got {entry!r}")
            windows.append(TmuxWindow(name=entry.get("name"), command=entry.get("command")))
        return cls(windows=windows)

    def to_yaml(self) -> str:
        """Serialize to YAML, preserving window order."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str) -> "Config":
        """Parse YAML produced by to_yaml (or hand-written)."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config YAML: {e}") from e

        if data is None:
            return cls()
        try:
            return cls.from_dict(data)
        except ValueError as e:
            raise ConfigError(f"Invalid config: {e}") from e

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "Config":
        """Load the config, creating the default file on first run."""
        config_path = Path(path) if path else default_config_path()
        if not config_path.exists():
            config = cls()
            config.save_to_path(config_path)
            logger.info(f"Created default config at {config_path}")
            return config
        return cls.load_from_path(config_path)

    @classmethod
    def load_from_path(cls, path: Union[str, Path]) -> "Config":
        """Load the config from an existing file."""
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config {config_path}: {e}") from e

        logger.debug(f"Loaded config from {config_path}")
        return cls.from_yaml(text)

    def save_to_path(self, path: Union[str, Path]) -> None:
        """Write the config with its documenting header."""
        config_path = Path(path)
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(CONFIG_HEADER + "\n" + self.to_yaml(), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not write config {config_path}: {e}") from e
