"""Core configuration, database, errors and security primitives."""

from blogapi.core.config import get_settings

__all__ = ["get_settings"]
