"""
Host probe — read-only view of the machine being set up.

Component checks and validations ask the probe instead of touching
``shutil``/``os.path`` directly, so tests can swap in a fake host.
Nothing here changes the system.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class HostProbe:
    """Queries against the real host.

    Args:
        home: Home directory used to expand ``~`` paths.
    """

    def __init__(self, home: Path | None = None):
        self._home = home

    @property
    def home(self) -> Path:
        return self._home or Path.home()

    def expand(self, path: str | Path) -> Path:
        """Expand a leading ``~`` against this probe's home."""
        text = str(path)
        if text == "~":
            return self.home
        if text.startswith("~/"):
            return self.home / text[2:]
        return Path(text)

    # ── Filesystem ───────────────────────────────────────────────

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def is_dir(self, path: str | Path) -> bool:
        return self.expand(path).is_dir()

    def is_file(self, path: str | Path) -> bool:
        return self.expand(path).is_file()

    def is_symlink(self, path: str | Path) -> bool:
        return self.expand(path).is_symlink()

    def is_executable(self, path: str | Path) -> bool:
        p = self.expand(path)
        return p.is_file() and os.access(p, os.X_OK)

    def read_link(self, path: str | Path) -> str | None:
        p = self.expand(path)
        if not p.is_symlink():
            return None
        return os.readlink(p)

    def resolve(self, path: str | Path) -> Path:
        """Fully resolved path, following every symlink."""
        return self.expand(path).resolve()

    def read_text(self, path: str | Path) -> str | None:
        try:
            return self.expand(path).read_text(encoding="utf-8")
        except OSError:
            return None

    # ── Tools ────────────────────────────────────────────────────

    def command_version(self, name: str) -> str | None:
        """First line of ``<name> --version``, or None if it cannot run."""
        try:
            proc = subprocess.run(
                [name, "--version"], capture_output=True, text=True, timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired):
            return None
        output = (proc.stdout or proc.stderr).strip()
        return output.splitlines()[0] if output else None

    def git_config(self, key: str) -> str | None:
        """Global git config value, or None when unset."""
        try:
            proc = subprocess.run(
                ["git", "config", "--global", "--get", key],
                capture_output=True, text=True, timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired):
            return None
        value = proc.stdout.strip()
        return value if proc.returncode == 0 and value else None

    def shell(self) -> str:
        """The login shell from ``$SHELL``."""
        return os.environ.get("SHELL", "")
