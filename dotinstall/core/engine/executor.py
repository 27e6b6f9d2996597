"""
Engine executor — runs a profile's components in order.

Per component:

    check satisfied? ──yes──→ skipped receipt (install never called)
          │no
          ▼
       install → validate → installed receipt

Fixed profiles stop at the first error.  The custom profile records
recoverable errors as failed receipts and moves on; anything not
recoverable (validation, metadata refresh, environment) still stops it.
"""

from __future__ import annotations

import logging
import time

from dotinstall.core.context import InstallContext
from dotinstall.core.errors import ComponentInstallError, InstallerError
from dotinstall.core.models.component import Component
from dotinstall.core.models.profile import Profile
from dotinstall.core.models.result import ComponentReceipt
from dotinstall.core.models.run import InstallationRun
from dotinstall.core.services.components import get_component

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def run_component(ctx: InstallContext, component: Component) -> ComponentReceipt:
    """Bring one component into its satisfied state.

    Raises:
        InstallerError: install or validate failed.  Filesystem errors
            are wrapped in ``ComponentInstallError``.
    """
    start = time.monotonic()
    if component.check(ctx):
        ctx.reporter.success(f"{component.key} is already installed, skipping")
        return ComponentReceipt.skipped(component.key, duration_ms=_elapsed_ms(start))

    ctx.reporter.step(f"Installing {component.key}...")
    try:
        component.install(ctx)
        if component.validate is not None:
            ctx.reporter.step(f"Validating {component.key} installation...")
            component.validate(ctx)
    except OSError as exc:
        raise ComponentInstallError(component.key, str(exc)) from exc

    ctx.reporter.success(f"{component.key} installation complete")
    return ComponentReceipt.installed(component.key, duration_ms=_elapsed_ms(start))


def execute_profile(
    ctx: InstallContext,
    profile: Profile,
    run: InstallationRun,
) -> InstallationRun:
    """Run every component of ``profile``, recording receipts on ``run``.

    Raises:
        InstallerError: The first failure in a fail-fast profile, or any
            non-recoverable failure.
    """
    total = len(profile.components)
    for index, key in enumerate(profile.components, start=1):
        component = get_component(key)
        ctx.reporter.section(f"[{index}/{total}] {component.description}")
        start = time.monotonic()
        try:
            receipt = run_component(ctx, component)
        except InstallerError as exc:
            run.record(ComponentReceipt.failure(
                key, str(exc), error_kind=exc.kind, duration_ms=_elapsed_ms(start),
            ))
            if profile.fail_fast or not exc.recoverable:
                raise
            logger.debug("Component %s failed (%s), continuing: %s", key, exc.kind, exc)
            ctx.reporter.error(f"Failed to install {key}: {exc}")
            continue
        run.record(receipt)
    return run


def plan_profile(ctx: InstallContext, profile: Profile) -> list[dict]:
    """Each component of ``profile`` with its current check state."""
    rows = []
    for key in profile.components:
        component = get_component(key)
        try:
            installed: bool | None = bool(component.check(ctx))
        except InstallerError as exc:
            logger.debug("Check for %s failed: %s", key, exc)
            installed = None
        rows.append({
            "key": key,
            "description": component.description,
            "installed": installed,
            "requires": list(component.requires),
        })
    return rows
