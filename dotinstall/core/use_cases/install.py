"""
Install use case — one installation run from profile choice to sync.

Flow:
    detect OS → OS supported? → choose profile (+ components for custom)
      → [dry run: print plan, stop]
      → not root → sudo → internet → disk space
      → confirm → components (sudo kept alive) → summary → sync

Nothing is installed before every pre-flight check has passed.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable

from dotinstall.adapters.base import PackageSession
from dotinstall.adapters.registry import select_package_manager
from dotinstall.adapters.shell.command import CommandRunner
from dotinstall.adapters.shell.download import Downloader
from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.context import InstallContext
from dotinstall.core.engine.executor import execute_profile, plan_profile
from dotinstall.core.errors import InstallerError
from dotinstall.core.models.identity import OSIdentity
from dotinstall.core.models.profile import Profile
from dotinstall.core.models.run import InstallationRun
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.detection.os_detect import detect_os
from dotinstall.core.services.detection.preflight import Preflight, is_ci
from dotinstall.core.services.detection.probe import HostProbe
from dotinstall.core.services.privileges import SudoKeepAlive
from dotinstall.core.services.profiles import (
    CUSTOM_CHOICES,
    build_custom_profile,
    resolve_profile,
)
from dotinstall.core.services.selection import Prompter, select_prompter
from dotinstall.core.services.sync import run_sync

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "quick"


@dataclass
class InstallRequest:
    """What the operator asked for."""

    profile: str | None = None
    components: tuple[str, ...] | None = None  # custom selection, skips the menu
    assume_yes: bool = False
    skip_sync: bool = False
    backup: bool = False
    dry_run: bool = False


@dataclass
class InstallHost:
    """The collaborators a run talks to.

    ``build_host`` wires the real ones; tests hand in doubles.
    """

    runner: CommandRunner
    probe: HostProbe
    reporter: Reporter
    settings: InstallerSettings = field(default_factory=InstallerSettings)
    downloads: Downloader = field(default_factory=Downloader)
    preflight: Preflight | None = None
    prompter: Prompter | None = None
    detect: Callable[[], OSIdentity] = detect_os
    interactive: bool = True
    keepalive: bool = True

    def __post_init__(self) -> None:
        if self.preflight is None:
            self.preflight = Preflight(
                self.runner,
                self.reporter,
                probe_urls=self.settings.network_probe_urls,
                interactive=self.interactive,
            )


@dataclass
class InstallResult:
    """Outcome of ``run_install``."""

    profile: Profile | None = None
    run: InstallationRun | None = None
    plan: list[dict] = field(default_factory=list)
    sync: str | None = None
    cancelled: bool = False

    def to_dict(self) -> dict:
        return {
            "profile": self.profile.name if self.profile else None,
            "components": list(self.profile.components) if self.profile else [],
            "run": self.run.summary() if self.run else None,
            "plan": self.plan,
            "sync": self.sync,
            "cancelled": self.cancelled,
        }


def build_host(
    settings: InstallerSettings,
    reporter: Reporter,
    runner: CommandRunner | None = None,
) -> InstallHost:
    """Real collaborators for a run on this machine."""
    try:
        interactive = sys.stdin.isatty()
    except (AttributeError, ValueError):
        interactive = False
    return InstallHost(
        runner=runner or CommandRunner(),
        probe=HostProbe(),
        reporter=reporter,
        settings=settings,
        prompter=select_prompter(settings),
        interactive=interactive,
    )


# ── Profile choice ──────────────────────────────────────────────


def choose_profile(request: InstallRequest, host: InstallHost, silent: bool) -> Profile:
    name = request.profile
    if name is None:
        if silent or host.prompter is None:
            host.reporter.info(f"No profile given; using '{DEFAULT_PROFILE}'")
            name = DEFAULT_PROFILE
        else:
            name = host.prompter.choose_profile()

    if name != "custom":
        return resolve_profile(name, host.settings)

    if request.components is not None:
        selection = list(request.components)
    elif silent or host.prompter is None:
        selection = list(CUSTOM_CHOICES)
    else:
        selection = host.prompter.choose_components(CUSTOM_CHOICES)
    return build_custom_profile(selection, host.settings)


def describe_plan(reporter: Reporter, profile: Profile, identity: OSIdentity) -> None:
    reporter.separator()
    reporter.info(f"Profile: {profile.name}")
    reporter.info(f"OS: {identity.label}")
    reporter.info(f"Components: {', '.join(profile.components)}")
    reporter.info(f"Required disk space: {profile.min_disk_mb}MB")
    reporter.separator()


# ── Use case ────────────────────────────────────────────────────


def run_install(request: InstallRequest, host: InstallHost) -> InstallResult:
    """Run one installation.

    Raises:
        InstallerError: A pre-flight check failed, the selection was
            invalid, or a component failure ended the run.
    """
    reporter = host.reporter
    silent = request.assume_yes or is_ci()
    result = InstallResult()

    identity = host.detect()
    host.preflight.check_os(identity)

    profile = choose_profile(request, host, silent)
    result.profile = profile
    logger.info("Profile %s: %s", profile.name, ", ".join(profile.components))

    session = PackageSession()
    packages = select_package_manager(
        identity, host.runner, session, reporter, fetch=host.downloads.fetch,
    )
    ctx = InstallContext(
        identity=identity,
        runner=host.runner,
        packages=packages,
        probe=host.probe,
        reporter=reporter,
        settings=host.settings,
        downloads=host.downloads,
        assume_yes=silent,
    )

    if request.dry_run:
        result.plan = plan_profile(ctx, profile)
        return result

    host.preflight.check_host(profile.min_disk_mb)

    if not silent:
        describe_plan(reporter, profile, identity)
        if host.prompter is not None and not host.prompter.confirm("Start installation?"):
            reporter.info("Installation cancelled")
            result.cancelled = True
            return result

    run = InstallationRun(
        profile=profile.name, assume_yes=request.assume_yes, skip_sync=request.skip_sync,
    )
    result.run = run
    reporter.header(f"{profile.name.capitalize()} Profile Installation")
    run.start()
    keepalive = SudoKeepAlive(host.runner) if host.keepalive else None
    try:
        if keepalive is not None:
            keepalive.start()
        execute_profile(ctx, profile, run)
    except InstallerError as exc:
        run.fail(str(exc))
        logger.debug("Run failed: %s", run.summary())
        raise
    finally:
        if keepalive is not None:
            keepalive.stop()
    run.complete()

    report_summary(reporter, profile, run)
    logger.debug("Package metadata refreshed %d time(s)", session.refresh_count)

    result.sync = run_sync(
        host.runner,
        reporter,
        host.settings,
        prompter=None if silent else host.prompter,
        skip=request.skip_sync,
        backup=request.backup,
    )
    report_next_steps(reporter, profile, host.settings)
    return result


def report_summary(reporter: Reporter, profile: Profile, run: InstallationRun) -> None:
    reporter.header(f"{profile.name.capitalize()} Profile Installation Complete!")
    if run.skipped_count:
        reporter.success(
            f"Installed {run.installed_count} component(s) "
            f"({run.skipped_count} already present)"
        )
    else:
        reporter.success(f"Installed {run.installed_count} component(s)")
    if run.failed_count:
        reporter.warning(
            f"Failed to install {run.failed_count} component(s): "
            f"{', '.join(run.failed_components)}"
        )


def report_next_steps(reporter: Reporter, profile: Profile, settings: InstallerSettings) -> None:
    reporter.info("Next steps:")
    reporter.info("  1. Log out and log back in (or run 'exec zsh')")
    reporter.info("  2. Your shell and tools will be ready to use")
    if "devbox" in profile.components:
        reporter.info(
            f"  3. Run 'devbox shell' in {settings.resolved_dotfiles_root()}"
        )
