"""
devbox — Jetify's Nix-backed development environments.
"""

from __future__ import annotations

from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import log_version, run_installer_script
from dotinstall.core.services.validation import (
    is_component_installed,
    skip_if_installed,
    validate_command,
    validate_executable,
)

KEY = "devbox"

INSTALLER = "https://get.jetify.com/devbox"


def check(ctx: InstallContext) -> bool:
    return is_component_installed(ctx.probe, "devbox")


def install(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "devbox", "Devbox"):
        return
    ctx.reporter.step("Downloading Devbox installer...")
    # -f skips the installer's own confirmation prompt.
    run_installer_script(ctx, INSTALLER, ["-f"], label="Devbox")
    log_version(ctx, "devbox", "Devbox")

    root = ctx.settings.resolved_dotfiles_root()
    if (root / "devbox.json").is_file():
        ctx.reporter.info(f"Devbox configuration found at {root / 'devbox.json'}")
        ctx.reporter.info(f"To use the Devbox environment, run: cd {root} && devbox shell")
    else:
        ctx.reporter.warning(f"devbox.json not found in {root}")


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "devbox")
    validate_executable(ctx, ctx.probe.which("devbox") or "devbox")


COMPONENT = Component(
    key=KEY,
    description="Devbox for reproducible development shells",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
