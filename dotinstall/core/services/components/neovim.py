"""
neovim — latest release tarball under ``/opt`` with a symlink in
``/usr/local/bin``.  Editor configuration arrives later via the sync step.
"""

from __future__ import annotations

from datetime import datetime

from dotinstall.adapters.shell.download import machine_arch
from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import log_version, scratch_dir
from dotinstall.core.services.validation import (
    is_component_installed,
    validate_command,
    validate_directory,
    validate_symlink,
)

KEY = "neovim"

SYMLINK = "/usr/local/bin/nvim"
CONFIG_DIR = "~/.config/nvim"


def asset_name() -> str:
    return f"nvim-linux-{machine_arch()}"


def install_dir() -> str:
    return f"/opt/{asset_name()}"


def download_url() -> str:
    return f"https://github.com/neovim/neovim/releases/latest/download/{asset_name()}.tar.gz"


def check(ctx: InstallContext) -> bool:
    return is_component_installed(ctx.probe, "nvim") and ctx.probe.is_symlink(SYMLINK)


def _link(ctx: InstallContext) -> None:
    ctx.runner.check(["ln", "-sf", f"{install_dir()}/bin/nvim", SYMLINK], sudo=True,
                     message="Failed to create the nvim symlink")


def install(ctx: InstallContext) -> None:
    if check(ctx):
        ctx.reporter.success("Neovim is already installed, skipping")
        return
    target = install_dir()

    if is_component_installed(ctx.probe, "nvim") and ctx.probe.is_dir(target):
        ctx.reporter.step("Creating missing symlink in /usr/local/bin...")
        _link(ctx)
        ctx.reporter.success("Symlink created")
    else:
        ctx.reporter.step("Downloading latest Neovim release...")
        if ctx.probe.is_dir(target):
            ctx.reporter.info("Backing up existing Neovim installation...")
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            ctx.runner.check(["mv", target, f"{target}.backup.{stamp}"], sudo=True)

        with scratch_dir() as tmp:
            tarball = ctx.downloads.download(download_url(), tmp / f"{asset_name()}.tar.gz")
            ctx.reporter.step("Extracting Neovim to /opt...")
            ctx.runner.check(["tar", "-C", "/opt", "-xzf", str(tarball)], sudo=True,
                             message="Failed to extract Neovim")
        ctx.reporter.step("Creating symlink in /usr/local/bin...")
        _link(ctx)
        log_version(ctx, "nvim", "Neovim")

    if not ctx.probe.is_dir(CONFIG_DIR):
        ctx.reporter.warning(f"Neovim config directory not found at {CONFIG_DIR}")
        ctx.reporter.info("The sync step will symlink your LazyVim configuration")


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "nvim")
    validate_directory(ctx, install_dir())
    validate_symlink(ctx, SYMLINK, f"{install_dir()}/bin/nvim")


COMPONENT = Component(
    key=KEY,
    description="Neovim (latest release) for the LazyVim configuration",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
