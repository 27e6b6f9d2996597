"""
Reporter — the operator-facing status stream.

Each line is an icon plus a message, colored with ``click.secho``:

    → step      (cyan, bold text)
    ℹ info      (blue)
    ✓ success   (green)
    ⚠ warning   (yellow)
    ✗ error     (red, stderr)

Every line is mirrored to the ``dotinstall.report`` logger at DEBUG so
a log file holds the full transcript of a run.
"""

from __future__ import annotations

import logging

import click

logger = logging.getLogger("dotinstall.report")

ICON_SUCCESS = "✓"
ICON_ERROR = "✗"
ICON_INFO = "ℹ"
ICON_WARNING = "⚠"
ICON_ARROW = "→"

_SEPARATOR_WIDTH = 60


class Reporter:
    """Colored status output for an installation run.

    Args:
        quiet: Suppress step/info/success lines.  Warnings and errors
            are always printed.
    """

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def step(self, message: str) -> None:
        logger.debug("step: %s", message)
        if self.quiet:
            return
        click.secho(f"{ICON_ARROW} ", fg="cyan", nl=False)
        click.secho(message, bold=True)

    def info(self, message: str) -> None:
        logger.debug("info: %s", message)
        if self.quiet:
            return
        click.secho(f"{ICON_INFO} ", fg="blue", nl=False)
        click.echo(message)

    def success(self, message: str) -> None:
        logger.debug("success: %s", message)
        if self.quiet:
            return
        click.secho(f"{ICON_SUCCESS} ", fg="green", nl=False)
        click.echo(message)

    def warning(self, message: str) -> None:
        logger.debug("warning: %s", message)
        click.secho(f"{ICON_WARNING} ", fg="yellow", nl=False)
        click.echo(message)

    def error(self, message: str) -> None:
        logger.debug("error: %s", message)
        click.secho(f"{ICON_ERROR} {message}", fg="red", err=True)

    def header(self, title: str) -> None:
        if self.quiet:
            return
        click.echo()
        click.echo("═" * _SEPARATOR_WIDTH)
        click.secho(title, fg="cyan", bold=True)
        click.echo("═" * _SEPARATOR_WIDTH)
        click.echo()

    def section(self, title: str) -> None:
        if self.quiet:
            return
        click.echo()
        click.secho(f"── {title} ", fg="magenta", bold=True, nl=False)
        click.secho("─" * max(0, _SEPARATOR_WIDTH - len(title) - 4), fg="magenta")

    def separator(self, char: str = "─") -> None:
        if not self.quiet:
            click.echo(char * _SEPARATOR_WIDTH)
