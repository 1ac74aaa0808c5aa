"""
Application configuration using Pydantic settings.

Re-exports the shared settings so backend modules and the ghsync package read
the same environment:
    from ghsync.config import get_settings, Settings
"""

from ghsync.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
