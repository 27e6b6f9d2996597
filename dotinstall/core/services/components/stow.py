"""
stow — GNU Stow, used by the sync step to symlink the dotfiles.
"""

from __future__ import annotations

from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.validation import is_component_installed, validate_command

KEY = "stow"


def check(ctx: InstallContext) -> bool:
    return is_component_installed(ctx.probe, "stow")


def install(ctx: InstallContext) -> None:
    ctx.reporter.step("Installing GNU Stow...")
    ctx.packages.install_if_missing("stow")


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "stow")


COMPONENT = Component(
    key=KEY,
    description="GNU Stow for symlinking the dotfiles",
    check=check,
    install=install,
    validate=validate,
)
