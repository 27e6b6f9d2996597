"""
fabric — the Fabric AI command-line tool, built with ``go install``.

Brings its own Go toolchain when none is present: the upstream tarball
on Debian (distribution Go is too old), the ``golang`` package on Fedora.
"""

from __future__ import annotations

from dotinstall.adapters.shell.download import machine_arch
from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import scratch_dir
from dotinstall.core.services.validation import (
    is_component_installed,
    skip_if_installed,
    validate_executable,
)

KEY = "fabric"

GO_VERSION = "1.22.1"
GO_ROOT = "/usr/local/go"
FABRIC_MODULE = "github.com/danielmiessler/fabric/cmd/fabric@latest"
FABRIC_BINARY = "~/go/bin/fabric"
CONFIG_DIR = "~/.config/fabric"

_GO_ARCH = {"x86_64": "amd64", "arm64": "arm64"}


def go_download_url() -> str:
    arch = _GO_ARCH.get(machine_arch(), "amd64")
    return f"https://go.dev/dl/go{GO_VERSION}.linux-{arch}.tar.gz"


def check(ctx: InstallContext) -> bool:
    return is_component_installed(ctx.probe, "fabric")


def install_go(ctx: InstallContext) -> None:
    if ctx.probe.which("go") is not None:
        ctx.reporter.info(f"Go is already installed: {ctx.probe.command_version('go') or 'go'}")
        return

    ctx.reporter.step("Installing Go...")
    if ctx.is_rpm:
        ctx.packages.install(["golang"])
        return

    if ctx.packages.is_installed("golang-go"):
        ctx.reporter.warning("Removing old Go from apt...")
        ctx.packages.remove(["golang-go"])

    with scratch_dir() as tmp:
        ctx.reporter.step(f"Downloading Go {GO_VERSION}...")
        tarball = ctx.downloads.download(go_download_url(), tmp / "go.tar.gz")
        ctx.reporter.step("Installing Go to /usr/local...")
        ctx.runner.check(["rm", "-rf", GO_ROOT], sudo=True)
        ctx.runner.check(["tar", "-C", "/usr/local", "-xzf", str(tarball)], sudo=True,
                         message="Failed to extract Go")
    ctx.reporter.success(f"Go {GO_VERSION} installed")


def install(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "fabric", "Fabric"):
        return
    install_go(ctx)
    ctx.reporter.step("Installing Fabric via go install...")
    ctx.runner.check(
        ["go", "install", FABRIC_MODULE],
        env_overrides={"PATH": f"{GO_ROOT}/bin:{ctx.home}/go/bin:$PATH"},
        message="Failed to install Fabric",
    )
    ctx.reporter.success(f"Fabric installed to {ctx.probe.expand(FABRIC_BINARY)}")

    if not ctx.probe.is_dir(CONFIG_DIR):
        ctx.reporter.info("Fabric config directory not found")
        ctx.reporter.info("The sync step will symlink it; then run 'fabric --setup'")


def validate(ctx: InstallContext) -> None:
    validate_executable(ctx, FABRIC_BINARY)


COMPONENT = Component(
    key=KEY,
    description="Fabric AI tool (installs Go if needed)",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
