"""
dotinstall — CLI entrypoint.

Usage:
    dotinstall --help
    dotinstall install --profile quick
    dotinstall install --profile full --yes
    dotinstall components status
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from dotinstall.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)
from dotinstall.core.observability.reporter import ICON_SUCCESS, Reporter
from dotinstall.ui.cli.common import load_settings_or_exit

from dotinstall import __version__


@click.group()
@click.version_option(version=__version__, prog_name="dotinstall")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to the settings file (default: ~/.config/dotinstall/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """dotinstall — profile-based dotfiles installer for Ubuntu, Debian and Fedora."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option(
    "--profile",
    "-p",
    type=click.Choice(["quick", "full", "custom"]),
    default=None,
    help="Installation profile (default: ask).",
)
@click.option(
    "--component",
    "components",
    multiple=True,
    help="Custom profile component (repeatable; skips the selection menu).",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip all confirmations.")
@click.option("--no-sync", "skip_sync", is_flag=True, help="Do not run the sync script afterwards.")
@click.option("--backup", is_flag=True, help="Let the sync script back up conflicting files.")
@click.option("--dry-run", is_flag=True, help="Show the plan without installing anything.")
@click.pass_context
def install(
    ctx: click.Context,
    profile: str | None,
    components: tuple[str, ...],
    assume_yes: bool,
    skip_sync: bool,
    backup: bool,
    dry_run: bool,
) -> None:
    """Install a profile, then sync the dotfiles.

    \b
    Profiles:
      quick    Essential tools only (zsh, starship, cli tools)  ~5 min
      full     Complete development environment               ~15 min
      custom   Interactive component selection
    """
    from dotinstall.core.errors import InstallerError
    from dotinstall.core.use_cases.install import InstallRequest, build_host, run_install

    if components and profile not in (None, "custom"):
        raise click.UsageError("--component only applies to the custom profile")

    settings = load_settings_or_exit(ctx)
    reporter = Reporter(quiet=ctx.obj.get("quiet", False))
    host_factory = ctx.obj.get("host_factory", build_host)
    host = host_factory(settings, reporter)

    request = InstallRequest(
        profile="custom" if components and profile is None else profile,
        components=components or None,
        assume_yes=assume_yes,
        skip_sync=skip_sync,
        backup=backup,
        dry_run=dry_run,
    )

    try:
        result = run_install(request, host)
    except InstallerError as e:
        reporter.error(str(e))
        sys.exit(1)

    if dry_run:
        click.secho(f"\n📋 Plan for profile '{result.profile.name}'", fg="cyan", bold=True)
        click.echo(f"   Required disk space: {result.profile.min_disk_mb}MB")
        for row in result.plan:
            if row["installed"] is None:
                click.secho(f"   ? {row['key']:<15} check failed", fg="yellow")
            elif row["installed"]:
                click.secho(f"   {ICON_SUCCESS} {row['key']:<15} already installed", fg="green")
            else:
                click.echo(f"   • {row['key']:<15} will be installed")
        click.echo()
        return

    if result.cancelled:
        return

    reporter.success("Installation complete! Your development environment is ready.")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def profiles(ctx: click.Context, as_json: bool) -> None:
    """List installation profiles and their components."""
    from dotinstall.core.services.profiles import describe_profiles

    rows = describe_profiles(load_settings_or_exit(ctx))

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        click.secho(f"\n📦 {row['name']}", fg="cyan", bold=True, nl=False)
        if row["estimated_time"]:
            click.echo(f"  ({row['estimated_time']})", nl=False)
        click.echo()
        click.echo(f"   {row['description']}")
        click.echo(f"   Disk: {row['min_disk_mb']}MB"
                   f"   Failures: {'abort' if row['fail_fast'] else 'counted, run continues'}")
        click.echo(f"   Components: {', '.join(row['components'])}")
    click.echo()


# ── Register sub-command groups from dotinstall/ui/cli/ ───────────

from dotinstall.ui.cli.components import components

cli.add_command(components)


if __name__ == "__main__":
    cli()
