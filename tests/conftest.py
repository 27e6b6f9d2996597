"""
Shared test fixtures — a fake host, a recording runner, an offline downloader.
"""

from pathlib import Path

import pytest

from dotinstall.adapters.mock import MockCommandRunner
from dotinstall.adapters.registry import select_package_manager
from dotinstall.adapters.shell.download import Downloader
from dotinstall.core.config.loader import GitSettings, InstallerSettings
from dotinstall.core.context import InstallContext
from dotinstall.core.errors import DownloadError
from dotinstall.core.models.identity import OSFamily, OSIdentity
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.detection.probe import HostProbe

UBUNTU = OSIdentity(
    distro="ubuntu", family=OSFamily.DEBIAN, version="24.04", pretty_name="Ubuntu 24.04 LTS",
)
FEDORA = OSIdentity(
    distro="fedora", family=OSFamily.RPM, version="40", pretty_name="Fedora Linux 40",
)
ARCH = OSIdentity(distro="arch", pretty_name="Arch Linux")


class FakeProbe(HostProbe):
    """In-memory host.

    Paths outside the home directory exist only if registered.  Paths
    inside it fall back to the real (temporary) filesystem, so code that
    creates files under ``~`` is visible to later checks.
    """

    def __init__(self, home: Path):
        super().__init__(home=home)
        self.binaries: dict[str, str] = {}
        self.paths: dict[str, str] = {}      # path → "dir" | "file" | "exec"
        self.links: dict[str, str] = {}
        self.texts: dict[str, str] = {"/etc/shells": ""}
        self.git: dict[str, str] = {}
        self.versions: dict[str, str] = {}
        self.login_shell = "/bin/bash"

    def _key(self, path) -> str:
        return str(self.expand(path))

    def _local(self, path) -> Path | None:
        p = self.expand(path)
        return p if p.is_relative_to(self.home) else None

    # ── Setup helpers ────────────────────────────────────────────

    def add_binary(self, name: str, version: str | None = None, path: str | None = None) -> None:
        path = path or f"/usr/bin/{name}"
        self.binaries[name] = path
        self.paths[path] = "exec"
        if version:
            self.versions[name] = f"{name} {version}"

    def add_dir(self, path) -> None:
        self.paths[self._key(path)] = "dir"

    def add_file(self, path, executable: bool = False) -> None:
        self.paths[self._key(path)] = "exec" if executable else "file"

    def add_link(self, link, target) -> None:
        self.links[self._key(link)] = self._key(target)

    # ── HostProbe ────────────────────────────────────────────────

    def which(self, name):
        return self.binaries.get(name)

    def is_dir(self, path):
        kind = self.paths.get(self._key(path))
        if kind is not None:
            return kind == "dir"
        local = self._local(path)
        return local is not None and local.is_dir()

    def is_file(self, path):
        kind = self.paths.get(self._key(path))
        if kind is not None:
            return kind in ("file", "exec")
        local = self._local(path)
        return local is not None and local.is_file()

    def is_executable(self, path):
        return self.paths.get(self._key(path)) == "exec"

    def is_symlink(self, path):
        if self._key(path) in self.links:
            return True
        local = self._local(path)
        return local is not None and local.is_symlink()

    def read_link(self, path):
        return self.links.get(self._key(path))

    def resolve(self, path):
        key = self._key(path)
        return Path(self.links.get(key, key))

    def read_text(self, path):
        return self.texts.get(self._key(path))

    def git_config(self, key):
        return self.git.get(key)

    def command_version(self, name):
        if name in self.versions:
            return self.versions[name]
        return f"{name} 1.0.0" if name in self.binaries else None

    def shell(self):
        return self.login_shell


class FakeDownloader(Downloader):
    """Downloader that never touches the network."""

    def __init__(self, payload: bytes = b"#!/bin/sh\nexit 0\n"):
        self.payload = payload
        self.urls: list[str] = []
        self.failures: set[str] = set()
        self.release = {
            "url": "https://github.com/jesseduffield/lazygit/releases/download/v0.44.1/"
                   "lazygit_0.44.1_Linux_x86_64.tar.gz",
            "version": "0.44.1",
            "asset_name": "lazygit_0.44.1_Linux_x86_64.tar.gz",
        }

    def fetch(self, url, *, timeout=60, headers=None):
        self.urls.append(url)
        if url in self.failures:
            raise DownloadError(url, "unreachable")
        return self.payload

    def latest_release(self, repo, asset_pattern):
        self.urls.append(f"release:{repo}")
        return dict(self.release)


def mark_everything_installed(probe: FakeProbe, runner: MockCommandRunner) -> None:
    """Put the host in the state a completed full install leaves behind."""
    runner.set_output("dpkg-query -W -f=${Status}", "install ok installed")
    runner.set_output("dnf group list --installed", "Installed Groups:\n   Development Tools\n")
    for name in ("git", "curl", "wget", "zsh", "starship", "eza", "fzf", "bat", "zoxide",
                 "gh", "lazygit", "devbox", "elixir", "erl", "fabric", "stow"):
        probe.add_binary(name)
    probe.add_binary("nvim", path="/opt/nvim-linux-x86_64/bin/nvim")
    probe.add_link("/usr/local/bin/nvim", "/opt/nvim-linux-x86_64/bin/nvim")
    probe.add_dir("~/.local/share/zinit")
    probe.login_shell = "/usr/bin/zsh"
    probe.git.update({
        "init.defaultBranch": "main",
        "user.name": "Jane Doe",
        "user.email": "jane@example.com",
    })


def make_ctx(identity, runner, probe, reporter, settings, downloads, assume_yes=True):
    packages = select_package_manager(identity, runner, reporter=reporter, fetch=downloads.fetch)
    return InstallContext(
        identity=identity,
        runner=runner,
        packages=packages,
        probe=probe,
        reporter=reporter,
        settings=settings,
        downloads=downloads,
        assume_yes=assume_yes,
    )


# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def dotfiles(tmp_path: Path) -> Path:
    path = tmp_path / "dotfiles"
    path.mkdir()
    return path


@pytest.fixture
def probe(home: Path) -> FakeProbe:
    return FakeProbe(home)


@pytest.fixture
def runner() -> MockCommandRunner:
    return MockCommandRunner()


@pytest.fixture
def reporter() -> Reporter:
    return Reporter(quiet=True)


@pytest.fixture
def downloads() -> FakeDownloader:
    return FakeDownloader()


@pytest.fixture
def settings(dotfiles: Path) -> InstallerSettings:
    return InstallerSettings(
        dotfiles_root=dotfiles,
        git=GitSettings(user_name="Jane Doe", user_email="jane@example.com"),
    )


@pytest.fixture
def ctx(runner, probe, reporter, settings, downloads) -> InstallContext:
    """Install context for an Ubuntu host."""
    return make_ctx(UBUNTU, runner, probe, reporter, settings, downloads)


@pytest.fixture
def fedora_ctx(runner, probe, reporter, settings, downloads) -> InstallContext:
    """Install context for a Fedora host."""
    return make_ctx(FEDORA, runner, probe, reporter, settings, downloads)
