"""
Sync step — hand off to the dotfiles' own symlink script.

The script (``sync.sh`` in the dotfiles root by default) wraps GNU Stow;
this module only decides whether and how to call it.
"""

from __future__ import annotations

import logging

import click

from dotinstall.adapters.shell.command import CommandRunner
from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.selection import Prompter

logger = logging.getLogger(__name__)


def sync_command(script: str, *, backup: bool = False) -> list[str]:
    cmd = ["bash", script, "--yes"]
    if backup:
        cmd.append("--backup")
    return cmd


def run_sync(
    runner: CommandRunner,
    reporter: Reporter,
    settings: InstallerSettings,
    *,
    prompter: Prompter | None = None,
    skip: bool = False,
    backup: bool = False,
) -> str:
    """Run the sync script after a successful installation.

    Args:
        prompter: Asks "Sync dotfiles now?"; None means do not ask.
        skip: ``--no-sync`` was given.
        backup: Pass ``--backup`` so conflicting files are moved aside.

    Returns:
        ``"skipped"``, ``"missing"``, ``"declined"`` or ``"synced"``.

    Raises:
        CommandError: The script exited non-zero.
    """
    if skip:
        reporter.info("Skipping sync (--no-sync specified)")
        return "skipped"

    script = settings.sync_script_path()
    if not script.is_file():
        reporter.warning(f"{settings.sync_script} not found, skipping dotfile sync")
        return "missing"

    if prompter is not None and not prompter.confirm("Sync dotfiles now?"):
        reporter.info("Dotfile sync skipped")
        return "declined"

    reporter.step("Syncing dotfiles...")
    result = runner.check(
        sync_command(str(script), backup=backup),
        cwd=str(script.parent),
        message="Dotfile sync failed",
    )
    if result.stdout.strip() and not reporter.quiet:
        click.echo(result.stdout.rstrip())
    logger.debug("sync finished in %dms", result.duration_ms)
    reporter.success("Dotfiles synced")
    return "synced"
