"""
OS detection — read ``/etc/os-release`` into an ``OSIdentity``.

Only ``ID`` decides the family.  A missing or unreadable file yields the
``unknown`` family, which every caller treats as unsupported.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotinstall.core.models.identity import OSFamily, OSIdentity

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")

_FAMILY_BY_ID: dict[str, OSFamily] = {
    "ubuntu": OSFamily.DEBIAN,
    "debian": OSFamily.DEBIAN,
    "fedora": OSFamily.RPM,
}

_SUPPORTED_NAMES = ("Ubuntu", "Debian", "Fedora")


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release ``KEY=value`` lines (values may be quoted)."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


def detect_os(os_release: Path = OS_RELEASE) -> OSIdentity:
    """Identify the running distribution.

    Returns:
        ``OSIdentity``; ``family`` is ``unknown`` for anything that is
        not Ubuntu, Debian or Fedora, and when the file cannot be read.
    """
    try:
        fields = parse_os_release(os_release.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.debug("Cannot read %s: %s", os_release, exc)
        return OSIdentity(distro="unknown")

    distro = fields.get("ID", "unknown").lower() or "unknown"
    identity = OSIdentity(
        distro=distro,
        family=_FAMILY_BY_ID.get(distro, OSFamily.UNKNOWN),
        version=fields.get("VERSION_ID") or "unknown",
        pretty_name=fields.get("PRETTY_NAME", ""),
    )
    logger.debug("Detected OS: %s (family=%s)", identity.label, identity.family)
    return identity


def is_supported(family: OSFamily) -> bool:
    return family in (OSFamily.DEBIAN, OSFamily.RPM)


def supported_os_list() -> str:
    """Human-readable list of supported distributions."""
    return ", ".join(_SUPPORTED_NAMES)
