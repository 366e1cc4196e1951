"""
Configuration package.

Provides the static game configuration and the desktop host settings.
"""
from .base import BaseConfiguration, ConfigurationError
from .desktop import DesktopConfiguration

__all__ = [
    'BaseConfiguration',
    'ConfigurationError',
    'DesktopConfiguration'
]
