"""
Tests for domain models and the error taxonomy.
"""

import pytest
from pydantic import ValidationError as ModelValidationError

from dotinstall.core.errors import (
    ComponentInstallError,
    InsufficientDiskError,
    PackageManagerError,
    PrerequisiteMissingError,
    UnsupportedOSError,
    ValidationError,
)
from dotinstall.core.models import (
    Component,
    ComponentReceipt,
    InstallationRun,
    InvalidTransition,
    OSFamily,
    OSIdentity,
    PackageRef,
    Profile,
    RunState,
)

# ── InstallationRun ─────────────────────────────────────────────


class TestInstallationRun:
    def test_happy_path(self):
        run = InstallationRun(profile="quick")
        assert run.state is RunState.NOT_STARTED
        run.start()
        assert run.state is RunState.RUNNING
        assert run.started_at is not None
        run.complete()
        assert run.state is RunState.COMPLETED
        assert run.ended_at is not None

    def test_fail(self):
        run = InstallationRun(profile="full")
        run.start()
        run.fail("Failed to install packages: zsh")
        assert run.state is RunState.FAILED
        assert run.error == "Failed to install packages: zsh"

    def test_cannot_complete_before_start(self):
        with pytest.raises(InvalidTransition):
            InstallationRun(profile="quick").complete()

    def test_cannot_start_twice(self):
        run = InstallationRun(profile="quick")
        run.start()
        with pytest.raises(InvalidTransition):
            run.start()

    def test_terminal_states(self):
        run = InstallationRun(profile="quick")
        run.start()
        run.complete()
        with pytest.raises(InvalidTransition):
            run.fail("late")

    def test_record_requires_running(self):
        run = InstallationRun(profile="quick")
        with pytest.raises(InvalidTransition):
            run.record(ComponentReceipt.installed("stow"))

    def test_counters(self):
        run = InstallationRun(profile="custom")
        run.start()
        run.record(ComponentReceipt.installed("system-base"))
        run.record(ComponentReceipt.skipped("shell"))
        run.record(ComponentReceipt.failure("fabric", "go install failed", "command"))
        run.record(ComponentReceipt.installed("stow"))
        assert run.installed_count == 3
        assert run.skipped_count == 1
        assert run.failed_count == 1
        assert run.failed_components == ["fabric"]

    def test_summary(self):
        run = InstallationRun(profile="quick", assume_yes=True)
        run.start()
        run.record(ComponentReceipt.skipped("stow"))
        run.complete()
        assert run.summary() == {
            "profile": "quick",
            "state": "completed",
            "installed": 1,
            "skipped": 1,
            "failed": 0,
            "error": None,
        }


class TestComponentReceipt:
    def test_constructors(self):
        assert ComponentReceipt.installed("shell").ok
        assert ComponentReceipt.skipped("shell").ok
        failed = ComponentReceipt.failure("shell", "boom", error_kind="install")
        assert failed.failed
        assert not failed.ok
        assert failed.error_kind == "install"


# ── Identity / packages / profile / component ──────────────────


class TestOSIdentity:
    def test_frozen(self):
        identity = OSIdentity(distro="ubuntu", family=OSFamily.DEBIAN)
        with pytest.raises(ModelValidationError):
            identity.distro = "fedora"

    def test_defaults(self):
        identity = OSIdentity(distro="arch")
        assert identity.family is OSFamily.UNKNOWN
        assert identity.version == "unknown"
        assert not identity.supported


class TestPackageRef:
    def test_render(self):
        ref = PackageRef(name="zsh", version="5.9")
        assert ref.render(OSFamily.DEBIAN) == "zsh=5.9"
        assert ref.render(OSFamily.RPM) == "zsh-5.9"
        assert PackageRef(name="zsh").render(OSFamily.RPM) == "zsh"

    def test_coerce_and_str(self):
        ref = PackageRef.coerce("stow")
        assert ref == PackageRef(name="stow")
        assert PackageRef.coerce(ref) is ref
        assert str(PackageRef(name="zsh", version="5.9")) == "zsh (5.9)"
        assert str(ref) == "stow"


class TestProfile:
    def test_with_disk_requirement(self):
        profile = Profile(name="quick", components=("system-base",), min_disk_mb=1000)
        bigger = profile.with_disk_requirement(4000)
        assert bigger.min_disk_mb == 4000
        assert profile.min_disk_mb == 1000


class TestComponent:
    def test_to_dict(self):
        component = Component(
            key="demo",
            description="Demo",
            check=lambda ctx: True,
            install=lambda ctx: None,
            requires=("system-base",),
        )
        assert component.to_dict() == {
            "key": "demo", "description": "Demo", "requires": ["system-base"],
        }


# ── Errors ──────────────────────────────────────────────────────


class TestErrors:
    def test_package_manager_messages(self):
        error = PackageManagerError("install", ["zsh", "git"], "exit 100")
        assert str(error) == "Failed to install packages: git zsh (exit 100)"
        assert error.recoverable
        assert not PackageManagerError("refresh").recoverable

    def test_recoverability(self):
        assert ComponentInstallError("fabric", "x").recoverable
        assert PrerequisiteMissingError("elixir-erlang", "devbox").recoverable
        assert not ValidationError("x").recoverable
        assert not UnsupportedOSError("arch").recoverable

    def test_messages(self):
        assert str(InsufficientDiskError(2000, 500)) == (
            "Insufficient disk space. Required: 2000MB, Available: 500MB"
        )
        assert str(UnsupportedOSError("arch")) == (
            "Unsupported operating system: arch. Supported systems: Ubuntu, Debian, Fedora"
        )
        assert str(PrerequisiteMissingError("elixir-erlang", "devbox", "Install it first.")) == (
            "devbox is required by elixir-erlang but is not installed. Install it first."
        )
