from dotinstall.core.services.detection.os_detect import detect_os, is_supported, supported_os_list
from dotinstall.core.services.detection.preflight import Preflight, available_disk_mb, is_ci
from dotinstall.core.services.detection.probe import HostProbe

__all__ = [
    "HostProbe",
    "Preflight",
    "available_disk_mb",
    "detect_os",
    "is_ci",
    "is_supported",
    "supported_os_list",
]
