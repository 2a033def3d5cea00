"""Core configuration, error taxonomy and session tokens."""

from roster.core.config import get_settings, settings
from roster.core.errors import RosterError

__all__ = ["RosterError", "get_settings", "settings"]
