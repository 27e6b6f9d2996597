"""
Settings loader — reads the installer's YAML settings file.

Everything is optional: with no file at all the installer runs on
defaults.  Lookup order: explicit ``--config`` path, then
``$DOTINSTALL_CONFIG``, then ``~/.config/dotinstall/config.yml``.

Example::

    dotfiles_root: ~/dotfiles
    git:
      user_name: Jane Doe
      user_email: jane@example.com
    min_disk_mb:
      full: 3000
    use_gum: auto
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Mapping

import yaml
from pydantic import BaseModel, Field

from dotinstall.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOTINSTALL_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/dotinstall/config.yml")


class GitSettings(BaseModel):
    """Global git identity applied by the git-config component."""

    user_name: str | None = None
    user_email: str | None = None
    default_branch: str = "main"


class InstallerSettings(BaseModel):
    """User settings for an installation run."""

    dotfiles_root: Path | None = None
    git: GitSettings = Field(default_factory=GitSettings)
    sync_script: str = "sync.sh"
    min_disk_mb: dict[str, int] = Field(default_factory=dict)
    network_probe_urls: list[str] = Field(
        default_factory=lambda: ["https://github.com", "https://google.com"],
    )
    use_gum: bool | Literal["auto"] = "auto"

    def resolved_dotfiles_root(self) -> Path:
        """The dotfiles checkout (defaults to the working directory)."""
        if self.dotfiles_root is None:
            return Path.cwd()
        return self.dotfiles_root.expanduser()

    def sync_script_path(self) -> Path:
        return self.resolved_dotfiles_root() / self.sync_script


def find_settings_file(
    explicit: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Locate the settings file.

    Returns:
        The explicit path (even if missing, so the caller can report it),
        the env var path, the default path if it exists, or None.
    """
    if explicit is not None:
        return explicit
    environ = os.environ if environ is None else environ
    env_path = environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.is_file() else None


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> InstallerSettings:
    """Load and validate installer settings.

    Raises:
        ConfigError: The file named by ``--config`` or the env var is
            missing, unreadable, not YAML, or fails validation.
    """
    path = find_settings_file(path, environ)
    if path is None:
        logger.debug("No settings file; using defaults")
        return InstallerSettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return InstallerSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = InstallerSettings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
