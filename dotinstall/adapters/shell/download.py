"""
Downloads — installer scripts, release tarballs and signing keys.

Plain ``urllib.request``; failures raise ``DownloadError`` (recoverable,
network class) so the component layer can tell a dead mirror from a
crashed installer.
"""

from __future__ import annotations

import json
import logging
import platform
import urllib.request
from pathlib import Path
from typing import Any, Callable
from urllib.error import URLError

from dotinstall.core.errors import DownloadError

logger = logging.getLogger(__name__)

_USER_AGENT = "dotinstall/0.1"

_ARCH_MAP = {"x86_64": "x86_64", "amd64": "x86_64", "aarch64": "arm64", "arm64": "arm64"}


def fetch_bytes(url: str, *, timeout: int = 60, headers: dict[str, str] | None = None) -> bytes:
    """GET ``url`` and return the body."""
    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT, **(headers or {})})
    logger.debug("GET %s", url)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read()
    except (URLError, OSError, ValueError) as exc:
        raise DownloadError(url, str(exc)[:200]) from exc


def machine_arch() -> str:
    """Architecture label as used in GitHub release asset names."""
    machine = platform.machine().lower()
    return _ARCH_MAP.get(machine, machine)


def resolve_github_release_asset(
    repo: str,
    asset_pattern: str,
    *,
    timeout: int = 15,
    fetch: Callable[..., bytes] = fetch_bytes,
) -> dict[str, Any]:
    """Find the download URL of the latest release asset of ``repo``.

    Args:
        repo: ``owner/name``.
        asset_pattern: Substring the asset name must contain.  ``{arch}``
            is replaced with the machine architecture.

    Returns:
        ``{"url": "...", "version": "0.44.1", "asset_name": "..."}``

    Raises:
        DownloadError: API unreachable or no matching asset.
    """
    api_url = f"https://api.github.com/repos/{repo}/releases/latest"
    raw = fetch(
        api_url,
        timeout=timeout,
        headers={"Accept": "application/vnd.github.v3+json"},
    )
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise DownloadError(api_url, f"invalid release metadata: {exc}") from exc

    pattern = asset_pattern.replace("{arch}", machine_arch())
    tag = data.get("tag_name", "")
    for asset in data.get("assets", []):
        name = asset.get("name", "")
        if pattern in name:
            return {
                "url": asset["browser_download_url"],
                "version": tag.lstrip("v"),
                "asset_name": name,
            }

    raise DownloadError(api_url, f"no asset matching '{pattern}' in {repo} {tag}")


class Downloader:
    """Network access for components, as one replaceable object."""

    def fetch(self, url: str, *, timeout: int = 60, headers: dict[str, str] | None = None) -> bytes:
        return fetch_bytes(url, timeout=timeout, headers=headers)

    def download(self, url: str, destination: Path, *, timeout: int = 300) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.fetch(url, timeout=timeout))
        logger.debug("Downloaded %s → %s", url, destination)
        return destination

    def latest_release(self, repo: str, asset_pattern: str) -> dict[str, Any]:
        return resolve_github_release_asset(repo, asset_pattern, fetch=self.fetch)
