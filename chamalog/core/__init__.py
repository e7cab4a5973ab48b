"""Core app configuration, database, security and errors."""

from chamalog.core.config import get_settings, settings
from chamalog.core.database import Database, get_db

__all__ = ["Database", "get_db", "get_settings", "settings"]
