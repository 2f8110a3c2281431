"""
Default configuration for varStarCore.

This module contains the default configuration settings.
"""

DEFAULT_CONFIG = {
    # Split configuration
    "split": {
        "holdout_fraction": 0.25,
        "n_folds": 5,
        "random_state": 42
    },

    # Distance/kernel configuration
    "distance": {
        "distance_type": "Euclidean",
        "kernel_type": "gaussian",
        "n_jobs": 1
    },

    # Logging configuration
    "logging": {
        "log_level": "INFO",
        "log_file": None
    }
}
