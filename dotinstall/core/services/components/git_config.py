"""
git-config — global git defaults and the GitHub CLI.

Identity values come from the settings file and are only written when
git has none yet.  In an interactive run a missing value is asked for.
"""

from __future__ import annotations

import click

from dotinstall.core.context import InstallContext
from dotinstall.core.errors import ComponentInstallError
from dotinstall.core.models.component import Component
from dotinstall.core.services.components.helpers import log_version
from dotinstall.core.services.validation import (
    is_component_installed,
    skip_if_installed,
    validate_command,
    validate_git_config,
)

KEY = "git-config"

GH_KEY_URL = "https://cli.github.com/packages/githubcli-archive-keyring.gpg"
GH_KEYRING = "/etc/apt/keyrings/githubcli-archive-keyring.gpg"
GH_RPM_REPO = "https://cli.github.com/packages/rpm/gh-cli.repo"

_IDENTITY_KEYS = {
    "user.name": ("user_name", "Git user name"),
    "user.email": ("user_email", "Git user email"),
}


def check(ctx: InstallContext) -> bool:
    if not is_component_installed(ctx.probe, "gh"):
        return False
    if ctx.probe.git_config("init.defaultBranch") != ctx.settings.git.default_branch:
        return False
    return all(ctx.probe.git_config(key) for key in _IDENTITY_KEYS)


def _set(ctx: InstallContext, key: str, value: str) -> None:
    ctx.runner.check(["git", "config", "--global", key, value],
                     message=f"Failed to set git config {key}")


def configure_git(ctx: InstallContext) -> None:
    branch = ctx.settings.git.default_branch
    if ctx.probe.git_config("init.defaultBranch") != branch:
        ctx.reporter.step(f"Setting default branch to '{branch}'...")
        _set(ctx, "init.defaultBranch", branch)
    else:
        ctx.reporter.info(f"Default branch already set to '{branch}'")

    for key, (field, label) in _IDENTITY_KEYS.items():
        current = ctx.probe.git_config(key)
        if current:
            ctx.reporter.info(f"{label} already set: {current}")
            continue
        value = getattr(ctx.settings.git, field)
        if not value and not ctx.assume_yes:
            value = click.prompt(label, default="", show_default=False).strip()
        if not value:
            raise ComponentInstallError(
                KEY, f"{key} is not set; add git.{field} to the settings file",
            )
        ctx.reporter.step(f"Setting {label.lower()}...")
        _set(ctx, key, value)

    ctx.reporter.success("Git configuration complete")


def install_github_cli(ctx: InstallContext) -> None:
    if skip_if_installed(ctx, "gh", "GitHub CLI"):
        return
    ctx.reporter.step("Installing GitHub CLI (gh)...")
    if ctx.is_debian:
        arch = ctx.runner.check(["dpkg", "--print-architecture"]).stdout.strip() or "amd64"
        ctx.packages.add_signing_key(GH_KEY_URL, keyring=GH_KEYRING, dearmor=False)
        ctx.packages.add_repository(
            f"deb [arch={arch} signed-by={GH_KEYRING}] https://cli.github.com/packages stable main",
            name="github-cli",
        )
    else:
        ctx.packages.add_repository(GH_RPM_REPO, name="gh-cli")
    ctx.packages.install(["gh"])
    log_version(ctx, "gh", "GitHub CLI")


def install(ctx: InstallContext) -> None:
    configure_git(ctx)
    install_github_cli(ctx)
    ctx.reporter.info("To authenticate with GitHub, run: gh auth login")


def validate(ctx: InstallContext) -> None:
    validate_command(ctx, "gh")
    validate_git_config(ctx, "init.defaultBranch", ctx.settings.git.default_branch)
    validate_git_config(ctx, "user.name")
    validate_git_config(ctx, "user.email")


COMPONENT = Component(
    key=KEY,
    description="Git defaults (branch, identity) and GitHub CLI",
    check=check,
    install=install,
    validate=validate,
    requires=("system-base",),
)
