"""
lazygit — latest GitHub release binary into ``/usr/local/bin``.
"""

from __future__ import annotations

from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import log_version, scratch_dir
from dotinstall.core.services.validation import (
    is_component_installed,
    skip_if_installed,
    validate_command,
    validate_executable,
)

KEY = "lazygit"

REPO = "jesseduffield/lazygit"
ASSET_PATTERN = "Linux_{arch}.tar.gz"
BINARY = "/usr/local/bin/lazygit"


def check(ctx: InstallContext) -> bool:
    return is_component_installed(ctx.probe, "lazygit")


def install(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "lazygit", "LazyGit"):
        return
    ctx.reporter.step("Fetching latest LazyGit release...")
    release = ctx.downloads.latest_release(REPO, ASSET_PATTERN)

    with scratch_dir() as tmp:
        ctx.reporter.step(f"Downloading LazyGit {release['version']}...")
        tarball = ctx.downloads.download(release["url"], tmp / "lazygit.tar.gz")
        ctx.runner.check(["tar", "-C", str(tmp), "-xzf", str(tarball), "lazygit"],
                         message="Failed to extract LazyGit")
        ctx.reporter.step("Installing LazyGit...")
        ctx.runner.check(["install", str(tmp / "lazygit"), BINARY], sudo=True,
                         message="Failed to install LazyGit")

    log_version(ctx, "lazygit", "LazyGit")


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "lazygit")
    validate_executable(ctx, BINARY)


COMPONENT = Component(
    key=KEY,
    description="LazyGit terminal UI for git",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
