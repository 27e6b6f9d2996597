"""
elixir-erlang — Elixir and Erlang/OTP through a Nix flake wired into Devbox.

The flake lives in the dotfiles checkout (``flakes/elixir/flake.nix``)
and is copied to ``~/.devbox-flakes/elixir`` so the devbox project can
reference it by path.
"""

from __future__ import annotations

import logging
import shutil

from dotinstall.core.context import InstallContext
from dotinstall.core.errors import ComponentInstallError, PrerequisiteMissingError
from dotinstall.core.models.component import Component
from dotinstall.core.services.validation import is_component_installed, validate_file

logger = logging.getLogger(__name__)

KEY = "elixir-erlang"

FLAKES_DIR = "~/.devbox-flakes/elixir"
REPO_FLAKE = "flakes/elixir/flake.nix"
FLAKE_OUTPUTS = ("elixir", "erlang")


def check(ctx: InstallContext) -> bool:
    return is_component_installed(ctx.probe, "elixir") and is_component_installed(ctx.probe, "erl")


def install(ctx: InstallContext) -> None:
    if check(ctx):
        ctx.reporter.success("Elixir and Erlang are already installed, skipping")
        return
    if not is_component_installed(ctx.probe, "devbox"):
        ctx.reporter.warning("Devbox is required for Elixir/Erlang but is not installed")
        raise PrerequisiteMissingError(KEY, "devbox", "Please install Devbox first.")

    ctx.reporter.step("Setting up Nix flake for Elixir/Erlang...")
    flakes_dir = ctx.probe.expand(FLAKES_DIR)
    if not flakes_dir.is_dir():
        ctx.reporter.info(f"Creating flakes directory at {flakes_dir}")
        flakes_dir.mkdir(parents=True, exist_ok=True)

    root = ctx.settings.resolved_dotfiles_root()
    source = root / REPO_FLAKE
    if not source.is_file():
        raise ComponentInstallError(KEY, f"Flake source not found at {source}")
    shutil.copyfile(source, flakes_dir / "flake.nix")
    ctx.reporter.success("Flake configuration copied")

    if not (flakes_dir / "flake.lock").is_file():
        ctx.reporter.step("Initializing Nix flake...")
        ctx.runner.check(["nix", "flake", "update"], cwd=str(flakes_dir),
                         message="Failed to initialize flake")
        ctx.reporter.success("Flake initialized")

    ctx.reporter.step("Adding Elixir and Erlang to devbox...")
    devbox_json = root / "devbox.json"
    current = devbox_json.read_text(encoding="utf-8") if devbox_json.is_file() else ""
    for output in FLAKE_OUTPUTS:
        ref = f"path:{flakes_dir}#{output}"
        if ref in current:
            logger.debug("%s already in %s", ref, devbox_json)
            continue
        ctx.reporter.info(f"Adding {output} to devbox configuration...")
        result = ctx.runner.run(["devbox", "add", ref], cwd=str(root))
        if not result.ok:
            ctx.reporter.warning(
                f"Could not add {output} via devbox add, may need manual configuration"
            )

    ctx.reporter.success("Elixir and Erlang configured in devbox")
    ctx.reporter.info(f"To use them: cd {root} && devbox shell")


def validate(ctx: InstallContext) -> None:
    validate_file(ctx, f"{FLAKES_DIR}/flake.nix", "Nix flake configuration not found")


COMPONENT = Component(
    key=KEY,
    description="Elixir and Erlang/OTP via a Nix flake in Devbox",
    check=check,
    install=install,
    validate=validate,
    requires=("devbox",),
)
