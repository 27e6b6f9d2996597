from dotinstall.core.config.loader import (
    GitSettings,
    InstallerSettings,
    find_settings_file,
    load_settings,
)

__all__ = ["GitSettings", "InstallerSettings", "find_settings_file", "load_settings"]
