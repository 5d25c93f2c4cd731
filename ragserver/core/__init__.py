"""
Core module: Configuration, Logging, Exceptions, Retry policy
"""

from ragserver.core.config import Settings, settings

__all__ = ["Settings", "settings"]
