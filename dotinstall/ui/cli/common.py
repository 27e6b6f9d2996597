"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

import sys

import click

from dotinstall.core.config.loader import InstallerSettings, load_settings
from dotinstall.core.errors import ConfigError
from dotinstall.core.observability.reporter import Reporter


def load_settings_or_exit(ctx: click.Context) -> InstallerSettings:
    """Settings for this invocation; exit 1 on a bad settings file."""
    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        Reporter().error(str(e))
        sys.exit(1)
