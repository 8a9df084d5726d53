#!/usr/bin/env python3
"""
Dockmon - Configuration Module
-----------
Loads and saves settings in the user's home directory.
"""
import json
import logging
import os

logger = logging.getLogger(__name__)

# Configuration file path in user's home directory
CONFIG_FILE = os.path.expanduser("~/.dockmon.json")

DEFAULT_CONFIG = {
    "docker_url": None,  # None means docker.from_env()
    "refresh_interval": 0.5,  # seconds between render ticks
    "container_fetch_interval": 1.0,  # seconds between container list refreshes
    "log_file": None,
    "log_level": "WARNING",
}

# Lower bounds for numeric settings
_MINIMUMS = {
    "refresh_interval": 0.1,
    "container_fetch_interval": 0.1,
}


def normalize_config(values):
    """Merge values over the defaults, dropping unknown keys and clamping numbers"""
    config = dict(DEFAULT_CONFIG)
    for key, value in values.items():
        if key in DEFAULT_CONFIG and value is not None:
            config[key] = value

    for key, minimum in _MINIMUMS.items():
        try:
            config[key] = max(type(DEFAULT_CONFIG[key])(config[key]), minimum)
        except (TypeError, ValueError):
            logger.warning("Invalid value for %s: %r, using default", key, config[key])
            config[key] = DEFAULT_CONFIG[key]
    return config


def load_config(path=None):
    """Load configuration from file or use defaults"""
    path = path or CONFIG_FILE
    if not os.path.exists(path):
        return dict(DEFAULT_CONFIG)
    try:
        with open(path, 'r') as f:
            values = json.load(f)
        if not isinstance(values, dict):
            raise ValueError("top level must be an object")
    except (OSError, ValueError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return dict(DEFAULT_CONFIG)
    return normalize_config(values)


def save_config(config, path=None):
    """Save configuration to file. Returns False if it could not be written"""
    path = path or CONFIG_FILE
    try:
        with open(path, 'w') as f:
            json.dump(normalize_config(config), f, indent=2)
    except OSError as e:
        logger.warning("Could not save config %s: %s", path, e)
        return False
    return True
