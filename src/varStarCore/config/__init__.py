"""
Configuration modules for varStarCore.

This module contains the default configuration.
"""

from .default_config import DEFAULT_CONFIG

__all__ = [
    "DEFAULT_CONFIG",
]
