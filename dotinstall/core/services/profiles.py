"""
Installation profiles.

    quick   essential shell setup                      1000 MB
    full    quick + editors and developer tooling      2000 MB
    custom  mandatory base + a user selection          1000 MB

Fixed profiles are fail-fast.  The custom profile tolerates recoverable
component failures and reports counts at the end.
"""

from __future__ import annotations

import logging
from typing import Iterable

from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.errors import SelectionError
from dotinstall.core.models.profile import Profile
from dotinstall.core.services.components import CATALOG

logger = logging.getLogger(__name__)

LEADING_COMPONENTS: tuple[str, ...] = ("system-base",)
"""Installed first in every profile."""

TRAILING_COMPONENTS: tuple[str, ...] = ("stow",)
"""Installed last in every profile; the sync step needs them."""

MANDATORY_COMPONENTS: tuple[str, ...] = LEADING_COMPONENTS + TRAILING_COMPONENTS
"""The mandatory base: present in every profile, never offered as a choice."""

CUSTOM_CHOICES: tuple[str, ...] = (
    "shell",
    "cli-tools",
    "git-config",
    "neovim",
    "lazygit",
    "devbox",
    "elixir-erlang",
    "fabric",
)

QUICK = Profile(
    name="quick",
    components=("system-base", "shell", "cli-tools", "git-config", "stow"),
    min_disk_mb=1000,
    description="Essential tools only (zsh, starship, cli tools)",
    estimated_minutes="~5 min",
)

FULL = Profile(
    name="full",
    components=(
        "system-base",
        "shell",
        "cli-tools",
        "git-config",
        "neovim",
        "lazygit",
        "devbox",
        "elixir-erlang",
        "stow",
    ),
    min_disk_mb=2000,
    description="Complete development environment (Neovim, LazyGit, Devbox, Elixir)",
    estimated_minutes="~15 min",
)

CUSTOM_MIN_DISK_MB = 1000

PROFILE_NAMES: tuple[str, ...] = ("quick", "full", "custom")

_FIXED = {p.name: p for p in (QUICK, FULL)}


def build_custom_profile(
    selection: Iterable[str],
    settings: InstallerSettings | None = None,
) -> Profile:
    """Assemble the custom profile from a component selection.

    The mandatory base wraps the selection (leading components first,
    trailing components last); the selection keeps catalog order with
    duplicates dropped.

    Raises:
        SelectionError: A key is not one of the custom choices.
    """
    chosen = set()
    for key in selection:
        if key in MANDATORY_COMPONENTS:
            continue
        if key not in CUSTOM_CHOICES:
            raise SelectionError(
                f"Unknown component: {key}. Available: {', '.join(CUSTOM_CHOICES)}"
            )
        chosen.add(key)

    components = (
        LEADING_COMPONENTS
        + tuple(key for key in CATALOG if key in chosen)
        + TRAILING_COMPONENTS
    )
    logger.debug("Custom profile: %s", ", ".join(components))
    profile = Profile(
        name="custom",
        components=components,
        min_disk_mb=CUSTOM_MIN_DISK_MB,
        description="Interactive component selection",
        fail_fast=False,
    )
    return _apply_overrides(profile, settings)


def resolve_profile(name: str, settings: InstallerSettings | None = None) -> Profile:
    """Look up a fixed profile by name.

    Raises:
        SelectionError: Unknown name, or ``custom`` (which needs a selection).
    """
    if name == "custom":
        raise SelectionError("The custom profile is built from a component selection")
    try:
        profile = _FIXED[name]
    except KeyError:
        raise SelectionError(
            f"Unknown profile: {name}. Available: {', '.join(PROFILE_NAMES)}"
        ) from None
    return _apply_overrides(profile, settings)


def _apply_overrides(profile: Profile, settings: InstallerSettings | None) -> Profile:
    if settings and profile.name in settings.min_disk_mb:
        return profile.with_disk_requirement(settings.min_disk_mb[profile.name])
    return profile


def describe_profiles(settings: InstallerSettings | None = None) -> list[dict]:
    """Profile summaries for display (custom shown with every choice)."""
    rows = []
    for profile in (
        resolve_profile("quick", settings),
        resolve_profile("full", settings),
        build_custom_profile(CUSTOM_CHOICES, settings),
    ):
        rows.append({
            "name": profile.name,
            "description": profile.description,
            "components": list(profile.components),
            "min_disk_mb": profile.min_disk_mb,
            "estimated_time": profile.estimated_minutes,
            "fail_fast": profile.fail_fast,
        })
    return rows
