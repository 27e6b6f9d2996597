"""
Idempotency and validation checks.

Two families of helpers:

- ``is_component_installed`` / ``skip_if_installed``: answer "is this
  already here?" before a component installs anything.
- ``validate_*``: post-install assertions.  Each reports success or
  raises ``ValidationError``; a failed validation is never recoverable.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable

from dotinstall.core.errors import ValidationError
from dotinstall.core.services.detection.probe import HostProbe

if TYPE_CHECKING:
    from dotinstall.core.context import InstallContext

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+(?:\.[0-9]+)?")


# ── Idempotency ─────────────────────────────────────────────────


def _binary(name: str) -> Callable[[HostProbe], bool]:
    return lambda probe: probe.which(name) is not None


COMPONENT_CHECKS: dict[str, Callable[[HostProbe], bool]] = {
    "zsh": _binary("zsh"),
    "starship": _binary("starship"),
    "zinit": lambda probe: probe.is_dir("~/.local/share/zinit"),
    "neovim": _binary("nvim"),
    "nvim": _binary("nvim"),
    "devbox": _binary("devbox"),
    "lazygit": _binary("lazygit"),
    "gh": _binary("gh"),
    "eza": _binary("eza"),
    "fzf": _binary("fzf"),
    "bat": lambda probe: probe.which("bat") is not None or probe.which("batcat") is not None,
    "zoxide": _binary("zoxide"),
    "fabric": lambda probe: (
        probe.which("fabric") is not None or probe.is_file("~/go/bin/fabric")
    ),
    "stow": _binary("stow"),
}


def is_component_installed(probe: HostProbe, key: str) -> bool:
    """Whether ``key`` is present on the host.

    Unknown keys fall back to "a binary of the same name is on PATH".
    """
    check = COMPONENT_CHECKS.get(key, _binary(key))
    return bool(check(probe))


def skip_if_installed(ctx: InstallContext, key: str, label: str | None = None) -> bool:
    """Report and return True if ``key`` is already installed."""
    if is_component_installed(ctx.probe, key):
        ctx.reporter.success(f"{label or key} is already installed, skipping")
        return True
    return False


# ── Versions ────────────────────────────────────────────────────


def parse_version(text: str) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", text))


def version_ge(version: str, minimum: str) -> bool:
    """Dotted numeric comparison: ``version >= minimum``."""
    have = parse_version(version)
    want = parse_version(minimum)
    width = max(len(have), len(want))
    return have + (0,) * (width - len(have)) >= want + (0,) * (width - len(want))


def extract_version(output: str) -> str | None:
    """First ``X.Y[.Z]`` in a tool's version banner."""
    match = _VERSION_RE.search(output or "")
    return match.group(0) if match else None


# ── Validations ─────────────────────────────────────────────────


def validate_command(
    ctx: InstallContext,
    command: str,
    message: str | None = None,
    min_version: str | None = None,
) -> None:
    if ctx.probe.which(command) is None:
        raise ValidationError(message or f"Command '{command}' not found")
    ctx.reporter.success(f"{command} is installed")
    if min_version:
        validate_version(ctx, command, min_version)


def validate_any_command(ctx: InstallContext, *commands: str) -> str:
    """Pass if any of ``commands`` is on PATH; return the one found."""
    for command in commands:
        if ctx.probe.which(command) is not None:
            ctx.reporter.success(f"{command} is installed")
            return command
    raise ValidationError(f"None of {', '.join(commands)} found")


def validate_version(ctx: InstallContext, command: str, min_version: str) -> None:
    banner = ctx.probe.command_version(command)
    installed = extract_version(banner or "")
    if installed is None:
        ctx.reporter.warning(f"Could not determine version of {command}")
        return
    if not version_ge(installed, min_version):
        raise ValidationError(
            f"{command} version {installed} is less than required {min_version}"
        )
    ctx.reporter.success(f"{command} version {installed} >= {min_version}")


def validate_file(ctx: InstallContext, path: str, message: str | None = None) -> None:
    if not ctx.probe.is_file(path):
        raise ValidationError(message or f"File '{path}' not found")
    ctx.reporter.success(f"File exists: {path}")


def validate_directory(ctx: InstallContext, path: str, message: str | None = None) -> None:
    if not ctx.probe.is_dir(path):
        raise ValidationError(message or f"Directory '{path}' not found")
    ctx.reporter.success(f"Directory exists: {path}")


def validate_symlink(ctx: InstallContext, link: str, target: str | None = None) -> None:
    if not ctx.probe.is_symlink(link):
        raise ValidationError(f"Symlink not found: {link}")
    if target is not None:
        actual = ctx.probe.resolve(link)
        expected = ctx.probe.resolve(target)
        if actual != expected:
            raise ValidationError(f"Symlink {link} points to {actual}, expected {expected}")
    ctx.reporter.success(f"Symlink exists: {link}")


def validate_git_config(ctx: InstallContext, key: str, expected: str | None = None) -> None:
    actual = ctx.probe.git_config(key)
    if not actual:
        raise ValidationError(f"Git config '{key}' is not set")
    if expected is not None and actual != expected:
        raise ValidationError(f"Git config '{key}' is '{actual}', expected '{expected}'")
    ctx.reporter.success(f"Git config is set: {key}={actual}")


def validate_executable(ctx: InstallContext, path: str) -> None:
    if not ctx.probe.is_file(path):
        raise ValidationError(f"File not found: {path}")
    if not ctx.probe.is_executable(path):
        raise ValidationError(f"File is not executable: {path}")
    ctx.reporter.success(f"File is executable: {path}")


def validate_shell(ctx: InstallContext, expected: str) -> bool:
    """Warn (without failing) when the login shell is not ``expected``."""
    current = ctx.probe.shell().rsplit("/", 1)[-1]
    if current != expected:
        ctx.reporter.warning(f"Current shell is {current or 'unknown'}, expected {expected}")
        ctx.reporter.info(
            f"You may need to log out and log back in, or run: chsh -s $(which {expected})"
        )
        return False
    ctx.reporter.success(f"Shell is set to {expected}")
    return True
