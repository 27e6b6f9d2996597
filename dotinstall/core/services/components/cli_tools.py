"""
cli-tools — eza, fzf, bat and zoxide.
"""

from __future__ import annotations

from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import log_version, run_installer_script
from dotinstall.core.services.validation import (
    is_component_installed,
    skip_if_installed,
    validate_any_command,
    validate_command,
)

KEY = "cli-tools"

TOOLS = ("eza", "fzf", "bat", "zoxide")

EZA_KEY_URL = "https://raw.githubusercontent.com/eza-community/eza/main/deb.asc"
EZA_KEYRING = "/etc/apt/keyrings/gierens.gpg"
EZA_APT_SOURCE = f"deb [signed-by={EZA_KEYRING}] http://deb.gierens.de stable main"
EZA_COPR = "atim/eza"
ZOXIDE_INSTALLER = "https://raw.githubusercontent.com/ajeetdsouza/zoxide/main/install.sh"


def check(ctx: InstallContext) -> bool:
    return all(is_component_installed(ctx.probe, tool) for tool in TOOLS)


def install_eza(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "eza"):
        return
    ctx.reporter.step("Installing eza...")
    if ctx.is_debian:
        ctx.packages.add_signing_key(EZA_KEY_URL, keyring=EZA_KEYRING)
        ctx.packages.add_repository(EZA_APT_SOURCE, name="gierens")
    else:
        ctx.packages.enable_copr(EZA_COPR)
    ctx.packages.install(["eza"])
    log_version(ctx, "eza", "eza")


def install_fzf(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "fzf"):
        return
    ctx.reporter.step("Installing fzf...")
    ctx.packages.install(["fzf"])
    log_version(ctx, "fzf", "fzf")


def install_bat(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "bat"):
        return
    ctx.reporter.step("Installing bat...")
    ctx.packages.install(["bat"])

    # Debian ships the binary as batcat.
    batcat = ctx.probe.which("batcat")
    if ctx.is_debian and batcat and ctx.probe.which("bat") is None:
        ctx.reporter.info("Creating symlink: bat -> batcat")
        link = ctx.probe.expand("~/.local/bin/bat")
        link.parent.mkdir(parents=True, exist_ok=True)
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(batcat)
    ctx.reporter.success("bat installed")


def install_zoxide(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "zoxide"):
        return
    ctx.reporter.step("Installing zoxide...")
    run_installer_script(ctx, ZOXIDE_INSTALLER, label="zoxide")
    log_version(ctx, "zoxide", "zoxide")


def install(ctx: InstallContext) -> None:
    install_eza(ctx)
    install_fzf(ctx)
    install_bat(ctx)
    install_zoxide(ctx)


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "eza")
    validate_command(ctx, "fzf")
    validate_any_command(ctx, "bat", "batcat")
    validate_command(ctx, "zoxide")


COMPONENT = Component(
    key=KEY,
    description="Modern CLI tools: eza, fzf, bat, zoxide",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
