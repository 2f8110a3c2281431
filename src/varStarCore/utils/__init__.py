"""
Utility modules for varStarCore.

This module contains logging, configuration and array/random-source helpers.
"""

from .logger import get_logger, setup_logging
from .config import Config, ConfigManager
from .helpers import resolve_rng, as_vector, as_matrix, safe_divide

__all__ = [
    "get_logger",
    "setup_logging",
    "Config",
    "ConfigManager",
    "resolve_rng",
    "as_vector",
    "as_matrix",
    "safe_divide",
]
