"""
Interactive choices — profile, components, confirmations.

Two front ends with the same interface:

    GumPrompter    TUI menus through the ``gum`` binary
    ClickPrompter  numbered menus and yes/no prompts through click

``select_prompter`` picks one by feature detection (``gum`` on PATH),
unless the settings force it with ``use_gum``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Sequence

import click

from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.errors import SelectionError
from dotinstall.core.services.components import CATALOG
from dotinstall.core.services.profiles import MANDATORY_COMPONENTS

logger = logging.getLogger(__name__)

PROFILE_MENU: tuple[tuple[str, str], ...] = (
    ("quick", "Quick - Essential tools (~5 min)"),
    ("full", "Full - Complete environment (~15 min)"),
    ("custom", "Custom - Choose components"),
)

GumRunner = Callable[[Sequence[str]], tuple[int, str]]


def component_label(key: str) -> str:
    component = CATALOG.get(key)
    return component.description if component else key


class Prompter(ABC):
    """Asks the operator to choose."""

    @abstractmethod
    def choose_profile(self) -> str:
        """Return ``quick``, ``full`` or ``custom``."""

    @abstractmethod
    def choose_components(self, choices: Sequence[str]) -> list[str]:
        """Return the chosen subset of ``choices`` (keys)."""

    @abstractmethod
    def confirm(self, question: str, default: bool = True) -> bool:
        ...


class ClickPrompter(Prompter):
    """Plain terminal prompts."""

    def choose_profile(self) -> str:
        click.secho("→ Select installation profile...", bold=True)
        for index, (_, label) in enumerate(PROFILE_MENU, start=1):
            click.echo(f"  {index}) {label}")
        choice = click.prompt(
            f"Enter your choice (1-{len(PROFILE_MENU)})",
            type=click.IntRange(1, len(PROFILE_MENU)),
        )
        return PROFILE_MENU[choice - 1][0]

    def choose_components(self, choices: Sequence[str]) -> list[str]:
        click.secho("→ Select components to install...", bold=True)
        for key in MANDATORY_COMPONENTS:
            click.echo(f"  Required: {component_label(key)}")
        return [
            key for key in choices
            if click.confirm(f"Install {component_label(key)}?", default=True)
        ]

    def confirm(self, question: str, default: bool = True) -> bool:
        return click.confirm(question, default=default)


def _run_gum(args: Sequence[str]) -> tuple[int, str]:
    # gum draws on the terminal (stderr) and prints the answer on stdout.
    proc = subprocess.run(["gum", *args], stdout=subprocess.PIPE, text=True)
    return proc.returncode, proc.stdout


class GumPrompter(Prompter):
    """Menus rendered by ``gum``."""

    def __init__(self, run: GumRunner = _run_gum):
        self._run = run

    def choose_profile(self) -> str:
        code, out = self._run(["choose", *(label for _, label in PROFILE_MENU)])
        answer = out.strip()
        for name, label in PROFILE_MENU:
            if code == 0 and answer == label:
                return name
        raise SelectionError("Invalid selection")

    def choose_components(self, choices: Sequence[str]) -> list[str]:
        labels = {component_label(key): key for key in choices}
        code, out = self._run([
            "choose", "--no-limit",
            "--header", "Components:",
            "--cursor-prefix", "[ ] ",
            "--selected-prefix", "[✓] ",
            "--height", "12",
            *labels,
        ])
        if code != 0:
            # Escape / Ctrl-C: nothing selected beyond the mandatory base.
            logger.debug("gum choose exited %d", code)
            return []
        picked = {line.strip() for line in out.splitlines() if line.strip()}
        return [key for label, key in labels.items() if label in picked]

    def confirm(self, question: str, default: bool = True) -> bool:
        args = ["confirm", question]
        if not default:
            args.append("--default=false")
        code, _ = self._run(args)
        return code == 0


def select_prompter(
    settings: InstallerSettings | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> Prompter:
    use_gum = settings.use_gum if settings else "auto"
    if use_gum == "auto":
        use_gum = which("gum") is not None
    logger.debug("Prompter: %s", "gum" if use_gum else "click")
    return GumPrompter() if use_gum else ClickPrompter()
