"""
system-base — compilers, archivers, network and clipboard utilities.

Always part of every profile.
"""

from __future__ import annotations

from dotinstall.core.context import InstallContext
from dotinstall.core.models.component import Component
from dotinstall.core.services.validation import validate_command

KEY = "system-base"

DEVELOPMENT_GROUP = "Development Tools"

DEBIAN_PACKAGES = (
    "curl",
    "wget",
    "git",
    "build-essential",
    "unzip",
    "zip",
    "tar",
    "gzip",
    "gpg",
    "ca-certificates",
    "xclip",
    "xsel",
    "xdg-utils",
    "software-properties-common",
    "apt-transport-https",
    "pkg-config",
    "libssl-dev",
    "net-tools",
    "dnsutils",
)

FEDORA_PACKAGES = (
    "curl",
    "wget",
    "git",
    "unzip",
    "zip",
    "tar",
    "gzip",
    "gpg",
    "gnupg2",
    "ca-certificates",
    "xclip",
    "xsel",
    "xdg-utils",
    "pkg-config",
    "openssl-devel",
    "net-tools",
    "bind-utils",
)


def base_packages(ctx: InstallContext) -> tuple[str, ...]:
    return DEBIAN_PACKAGES if ctx.is_debian else FEDORA_PACKAGES


def check(ctx: InstallContext) -> bool:
    if ctx.is_rpm and not ctx.packages.is_group_installed(DEVELOPMENT_GROUP):
        return False
    return all(ctx.packages.is_installed(p) for p in base_packages(ctx))


def install(ctx: InstallContext) -> None:
    if ctx.is_debian:
        ctx.reporter.step("Installing base packages for Ubuntu/Debian...")
    else:
        ctx.reporter.step("Installing base packages for Fedora...")
        ctx.packages.install_group_if_missing(DEVELOPMENT_GROUP)
    ctx.packages.install_packages(base_packages(ctx))
    ctx.reporter.success("Base system packages installed")


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "git", "Git is not installed")
    validate_command(ctx, "curl", "curl is not installed")
    validate_command(ctx, "wget", "wget is not installed")


COMPONENT = Component(
    key=KEY,
    description="Base system packages (build tools, curl, git, archivers)",
    check=check,
    install=install,
    validate=validate,
)
