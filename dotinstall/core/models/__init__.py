"""
Domain models for an installation run.

    from dotinstall.core.models import OSIdentity, Profile, InstallationRun
"""

from dotinstall.core.models.component import Component
from dotinstall.core.models.identity import OSFamily, OSIdentity
from dotinstall.core.models.packages import PackageRef
from dotinstall.core.models.profile import Profile
from dotinstall.core.models.result import ComponentReceipt
from dotinstall.core.models.run import InstallationRun, InvalidTransition, RunState

__all__ = [
    "Component",
    "ComponentReceipt",
    "InstallationRun",
    "InvalidTransition",
    "OSFamily",
    "OSIdentity",
    "PackageRef",
    "Profile",
    "RunState",
]
