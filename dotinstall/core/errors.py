"""
Installer errors — the failure taxonomy for an installation run.

Adapters return typed results; services raise one of these; the CLI
catches ``InstallerError`` at the top, prints it and exits non-zero.

``recoverable`` marks the errors the custom profile loop may count
and step over. Everything else aborts the run, in every profile.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from dotinstall.adapters.shell.command import CommandResult


class InstallerError(Exception):
    """Base class for every installer failure."""

    recoverable: bool = False
    kind: str = "error"


# ── Pre-flight / environment ────────────────────────────────────


class EnvironmentCheckError(InstallerError):
    """A pre-flight check failed; nothing has been installed yet."""

    kind = "environment"


class UnsupportedOSError(EnvironmentCheckError):
    """The running distribution is not one of the supported families."""

    def __init__(self, distro: str, supported: str = "Ubuntu, Debian, Fedora"):
        self.distro = distro
        super().__init__(
            f"Unsupported operating system: {distro}. Supported systems: {supported}"
        )


class RootUserError(EnvironmentCheckError):
    """The installer was started with elevated privileges."""

    def __init__(self) -> None:
        super().__init__(
            "This installer should not be run as root. Please run as a normal user."
        )


class SudoUnavailableError(EnvironmentCheckError):
    """sudo is missing or credentials could not be obtained."""


class NoNetworkError(EnvironmentCheckError):
    """None of the network probe endpoints answered."""

    def __init__(self) -> None:
        super().__init__(
            "No internet connection detected. Please check your network connection."
        )


class InsufficientDiskError(EnvironmentCheckError):
    """Free space is below the profile's requirement."""

    def __init__(self, required_mb: int, available_mb: int):
        self.required_mb = required_mb
        self.available_mb = available_mb
        super().__init__(
            f"Insufficient disk space. Required: {required_mb}MB, "
            f"Available: {available_mb}MB"
        )


# ── Package manager ─────────────────────────────────────────────


class PackageManagerError(InstallerError):
    """A package-manager operation failed.

    A failed refresh is never recoverable: nothing after it can trust
    the package metadata.
    """

    kind = "package_manager"

    def __init__(self, operation: str, packages: Iterable[str] = (), detail: str = ""):
        self.operation = operation
        self.packages = sorted(packages)
        message = f"Failed to {operation}"
        if self.packages:
            message += f" packages: {' '.join(self.packages)}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)

    @property
    def recoverable(self) -> bool:  # type: ignore[override]
        return self.operation != "refresh"


class UnsupportedOperationError(InstallerError):
    """The operation exists only on the other distribution family."""

    kind = "unsupported"


# ── Component execution ─────────────────────────────────────────


class ComponentInstallError(InstallerError):
    """A component's install action could not complete."""

    recoverable = True
    kind = "install"

    def __init__(self, component: str, message: str):
        self.component = component
        super().__init__(message)


class CommandError(InstallerError):
    """An external command did not succeed."""

    recoverable = True
    kind = "command"

    def __init__(self, result: CommandResult, message: str = ""):
        self.result = result
        super().__init__(message or result.describe())


class DownloadError(InstallerError):
    """A network download failed."""

    recoverable = True
    kind = "network"

    def __init__(self, url: str, detail: str):
        self.url = url
        super().__init__(f"Failed to download {url}: {detail}")


class PrerequisiteMissingError(InstallerError):
    """A component ran before the component it depends on succeeded."""

    recoverable = True
    kind = "prerequisite"

    def __init__(self, component: str, prerequisite: str, hint: str = ""):
        self.component = component
        self.prerequisite = prerequisite
        message = f"{prerequisite} is required by {component} but is not installed"
        if hint:
            message += f". {hint}"
        super().__init__(message)


class ValidationError(InstallerError):
    """A post-install check failed; the component is in a broken state."""

    kind = "validation"


# ── Configuration / selection ───────────────────────────────────


class ConfigError(InstallerError):
    """Raised when the settings file is invalid or unreadable."""

    kind = "config"


class SelectionError(InstallerError):
    """An invalid profile or component selection."""

    kind = "selection"
