from dotinstall.adapters.packages.apt import AptPackageManager
from dotinstall.adapters.packages.dnf import DnfPackageManager

__all__ = ["AptPackageManager", "DnfPackageManager"]
