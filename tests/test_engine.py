"""
Tests for the engine executor — component order, skipping and failure policy.
"""

import pytest

from dotinstall.core.engine.executor import execute_profile, plan_profile, run_component
from dotinstall.core.errors import (
    ComponentInstallError,
    PackageManagerError,
    SelectionError,
    ValidationError,
)
from dotinstall.core.models.component import Component
from dotinstall.core.models.profile import Profile
from dotinstall.core.models.run import InstallationRun
from dotinstall.core.services.components import CATALOG


class Recorder:
    """Builds fake components and remembers which installs ran."""

    def __init__(self, monkeypatch):
        self.monkeypatch = monkeypatch
        self.installed: list[str] = []

    def add(self, key, *, present=False, error=None, validate_error=None):
        def check(ctx):
            return present

        def install(ctx):
            self.installed.append(key)
            if error is not None:
                raise error

        def validate(ctx):
            if validate_error is not None:
                raise validate_error

        component = Component(key=key, description=f"{key} component",
                              check=check, install=install, validate=validate)
        self.monkeypatch.setitem(CATALOG, key, component)
        return component


@pytest.fixture
def fakes(monkeypatch) -> Recorder:
    return Recorder(monkeypatch)


def _profile(*keys: str, fail_fast: bool = True) -> Profile:
    return Profile(name="test", components=keys, min_disk_mb=1, fail_fast=fail_fast)


def _started(profile: Profile) -> InstallationRun:
    run = InstallationRun(profile=profile.name)
    run.start()
    return run


# ── run_component ───────────────────────────────────────────────


class TestRunComponent:
    def test_installs_missing(self, ctx, fakes):
        receipt = run_component(ctx, fakes.add("a"))
        assert receipt.status == "installed"
        assert fakes.installed == ["a"]

    def test_skips_present(self, ctx, fakes):
        receipt = run_component(ctx, fakes.add("a", present=True))
        assert receipt.status == "skipped"
        assert fakes.installed == []

    def test_validation_failure(self, ctx, fakes):
        component = fakes.add("a", validate_error=ValidationError("a is broken"))
        with pytest.raises(ValidationError):
            run_component(ctx, component)

    def test_os_error_is_wrapped(self, ctx, fakes):
        component = fakes.add("a", error=PermissionError("Permission denied: '/opt/x'"))
        with pytest.raises(ComponentInstallError) as exc:
            run_component(ctx, component)
        assert exc.value.component == "a"
        assert isinstance(exc.value.__cause__, PermissionError)


# ── execute_profile ─────────────────────────────────────────────


class TestExecuteProfile:
    def test_runs_in_order(self, ctx, fakes):
        for key in ("a", "b", "c"):
            fakes.add(key)
        profile = _profile("a", "b", "c")
        run = execute_profile(ctx, profile, _started(profile))
        assert fakes.installed == ["a", "b", "c"]
        assert [r.component for r in run.receipts] == ["a", "b", "c"]
        assert run.installed_count == 3

    def test_fail_fast_stops_at_first_error(self, ctx, fakes):
        fakes.add("a")
        fakes.add("b", error=ComponentInstallError("b", "broken"))
        fakes.add("c")
        profile = _profile("a", "b", "c")
        run = _started(profile)
        with pytest.raises(ComponentInstallError):
            execute_profile(ctx, profile, run)
        assert fakes.installed == ["a", "b"]
        assert [r.status for r in run.receipts] == ["installed", "failed"]
        assert run.receipts[1].error_kind == "install"

    def test_custom_continues_after_recoverable_error(self, ctx, fakes):
        fakes.add("a")
        fakes.add("b", error=ComponentInstallError("b", "broken"))
        fakes.add("c", present=True)
        fakes.add("d", error=PackageManagerError("install", ["d"]))
        profile = _profile("a", "b", "c", "d", fail_fast=False)
        run = execute_profile(ctx, profile, _started(profile))
        assert run.installed_count == 2
        assert run.skipped_count == 1
        assert run.failed_count == 2
        assert run.failed_components == ["b", "d"]

    def test_custom_stops_on_validation_error(self, ctx, fakes):
        fakes.add("a", validate_error=ValidationError("a is broken"))
        fakes.add("b")
        profile = _profile("a", "b", fail_fast=False)
        run = _started(profile)
        with pytest.raises(ValidationError):
            execute_profile(ctx, profile, run)
        assert fakes.installed == ["a"]
        assert run.failed_components == ["a"]

    def test_custom_stops_on_refresh_error(self, ctx, fakes):
        fakes.add("a", error=PackageManagerError("refresh"))
        fakes.add("b")
        profile = _profile("a", "b", fail_fast=False)
        with pytest.raises(PackageManagerError):
            execute_profile(ctx, profile, _started(profile))
        assert fakes.installed == ["a"]

    def test_custom_continues_after_os_error(self, ctx, fakes):
        fakes.add("a", error=FileNotFoundError("flake.nix"))
        fakes.add("b")
        profile = _profile("a", "b", fail_fast=False)
        run = execute_profile(ctx, profile, _started(profile))
        assert run.failed_components == ["a"]
        assert fakes.installed == ["a", "b"]

    def test_unknown_component(self, ctx):
        profile = _profile("not-a-component")
        with pytest.raises(SelectionError):
            execute_profile(ctx, profile, _started(profile))


# ── plan_profile ────────────────────────────────────────────────


class TestPlanProfile:
    def test_rows(self, ctx, fakes, monkeypatch):
        fakes.add("a", present=True)
        fakes.add("b")

        def broken_check(ctx):
            raise PackageManagerError("query")

        monkeypatch.setitem(CATALOG, "c", Component(
            key="c", description="c component", check=broken_check, install=lambda ctx: None,
        ))
        rows = plan_profile(ctx, _profile("a", "b", "c"))
        assert [(row["key"], row["installed"]) for row in rows] == [
            ("a", True), ("b", False), ("c", None),
        ]
        assert fakes.installed == []
