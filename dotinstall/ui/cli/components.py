"""
CLI commands for the component catalog.

Thin wrappers over ``dotinstall.core.services.components`` and the
status use case.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def components() -> None:
    """Components — catalog and installed status."""


@components.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_components(as_json: bool) -> None:
    """List every installable component."""
    from dotinstall.core.services.components import CATALOG
    from dotinstall.core.services.profiles import CUSTOM_CHOICES, MANDATORY_COMPONENTS

    rows = [
        {
            **component.to_dict(),
            "mandatory": key in MANDATORY_COMPONENTS,
            "selectable": key in CUSTOM_CHOICES,
        }
        for key, component in CATALOG.items()
    ]

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.secho("🧩 Components:", fg="cyan", bold=True)
    for row in rows:
        tag = " (required)" if row["mandatory"] else ""
        click.echo(f"   • {row['key']:<15} {row['description']}{tag}")
        if row["requires"]:
            click.echo(f"     {'':<15} requires: {', '.join(row['requires'])}")
    click.echo()


@components.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Check which components are already installed."""
    from dotinstall.adapters.shell.command import CommandRunner
    from dotinstall.core.errors import InstallerError
    from dotinstall.core.observability.reporter import ICON_ERROR, ICON_SUCCESS
    from dotinstall.core.services.detection.os_detect import detect_os
    from dotinstall.core.services.detection.probe import HostProbe
    from dotinstall.core.use_cases.status import component_status
    from dotinstall.ui.cli.common import load_settings_or_exit

    settings = load_settings_or_exit(ctx)
    detect = ctx.obj.get("detect", detect_os)
    runner = ctx.obj.get("runner") or CommandRunner()
    probe = ctx.obj.get("probe") or HostProbe()

    try:
        report = component_status(detect(), runner, probe, settings)
    except InstallerError as e:
        click.secho(f"{ICON_ERROR} {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    click.secho(f"🖥️  {report.os.label}", fg="cyan", bold=True)
    for item in report.components:
        if item.installed is None:
            click.secho(f"   ? {item.key:<15} check failed: {item.error}", fg="yellow")
        elif item.installed:
            click.secho(f"   {ICON_SUCCESS} {item.key:<15} installed", fg="green")
        else:
            click.echo(f"   {ICON_ERROR} {item.key:<15} not installed")
    click.echo()
    click.echo(f"   {report.installed}/{len(report.components)} installed")
