"""
shell — Zsh, the Starship prompt and the Zinit plugin manager.

Also switches the login shell to zsh.  A failed switch is a warning,
not an error: everything else still works from an explicit ``zsh``.
"""

from __future__ import annotations

import getpass
import logging

from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import log_version, run_installer_script
from dotinstall.core.services.validation import (
    is_component_installed,
    skip_if_installed,
    validate_command,
    validate_directory,
)

logger = logging.getLogger(__name__)

KEY = "shell"

STARSHIP_INSTALLER = "https://starship.rs/install.sh"
ZINIT_REPO = "https://github.com/zdharma-continuum/zinit.git"
ZINIT_HOME = "~/.local/share/zinit"


def check(ctx: InstallContext) -> bool:
    return all(is_component_installed(ctx.probe, key) for key in ("zsh", "starship", "zinit"))


def install_zsh(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "zsh", "Zsh"):
        return
    ctx.reporter.step("Installing Zsh...")
    ctx.packages.install_if_missing("zsh")
    log_version(ctx, "zsh", "Zsh")


def install_starship(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "starship", "Starship prompt"):
        return
    ctx.reporter.step("Installing Starship prompt...")
    run_installer_script(ctx, STARSHIP_INSTALLER, ["-y"], interpreter="sh", sudo=True,
                         label="Starship")
    log_version(ctx, "starship", "Starship")


def install_zinit(ctx: InstallContext) -> None:
    zinit_dir = ctx.probe.expand(ZINIT_HOME)
    if ctx.probe.is_dir(zinit_dir):
        ctx.reporter.success("Zinit is already installed")
        return
    ctx.reporter.step("Installing Zinit plugin manager...")
    zinit_dir.mkdir(parents=True, exist_ok=True)
    ctx.runner.check(
        ["git", "clone", ZINIT_REPO, str(zinit_dir / "zinit.git")],
        message="Failed to clone Zinit",
    )
    ctx.reporter.success(f"Zinit installed to {zinit_dir}")


def configure_default_shell(ctx: InstallContext) -> None:
    if ctx.probe.shell().rsplit("/", 1)[-1] == "zsh":
        ctx.reporter.success("Default shell is already zsh")
        return

    zsh_path = ctx.probe.which("zsh")
    if zsh_path is None:
        ctx.reporter.warning("zsh not found on PATH; default shell left unchanged")
        return

    ctx.reporter.step("Changing default shell to zsh...")
    shells = (ctx.probe.read_text("/etc/shells") or "").splitlines()
    if zsh_path not in shells:
        ctx.reporter.info(f"Adding {zsh_path} to /etc/shells")
        ctx.runner.run(["tee", "-a", "/etc/shells"], sudo=True, input=f"{zsh_path}\n")

    result = ctx.runner.run(["chsh", "-s", zsh_path, getpass.getuser()], sudo=True)
    if result.ok:
        ctx.reporter.success("Default shell changed to zsh")
        ctx.reporter.warning("You need to log out and log back in for the change to take effect")
    else:
        logger.debug("chsh failed: %s", result.describe())
        ctx.reporter.warning(
            f"Failed to change default shell. You can manually run: chsh -s {zsh_path}"
        )


def install(ctx: InstallContext) -> None:
    install_zsh(ctx)
    install_starship(ctx)
    install_zinit(ctx)
    configure_default_shell(ctx)


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "zsh")
    validate_command(ctx, "starship")
    validate_directory(ctx, ZINIT_HOME)


COMPONENT = Component(
    key=KEY,
    description="Zsh with Starship prompt and Zinit plugin manager",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
