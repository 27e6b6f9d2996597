"""
Adapters — everything that talks to the host: processes, downloads,
and the system package manager.
"""
