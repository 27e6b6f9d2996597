"""
Shared steps for component installers.
"""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from dotinstall.core.context import InstallContext

logger = logging.getLogger(__name__)


@contextmanager
def scratch_dir() -> Iterator[Path]:
    """Temporary directory removed when the step ends."""
    with tempfile.TemporaryDirectory(prefix="dotinstall-") as tmp:
        yield Path(tmp)


def run_installer_script(
    ctx: InstallContext,
    url: str,
    args: Sequence[str] = (),
    *,
    interpreter: str = "bash",
    sudo: bool = False,
    label: str = "",
) -> None:
    """Download a vendor install script and run it.

    Raises:
        DownloadError: The script could not be fetched.
        CommandError: The script exited non-zero.
    """
    with scratch_dir() as tmp:
        script = ctx.downloads.download(url, tmp / "install.sh")
        script.chmod(0o755)
        ctx.runner.check(
            [interpreter, str(script), *args],
            sudo=sudo,
            message=f"Failed to install {label or url}",
        )


def log_version(ctx: InstallContext, command: str, label: str) -> None:
    version = ctx.probe.command_version(command)
    ctx.reporter.success(f"{label} installed: {version}" if version else f"{label} installed")
