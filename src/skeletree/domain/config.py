from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences as JSON in the user data
directory, with default fallback when the file is missing or corrupted.
"""

import json
import logging
import os
from typing import Any, Dict

from skeletree.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_OUTPUT_FILE,
)
from skeletree.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Generate
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),
        "max_depth": DEFAULT_MAX_DEPTH,
        "output_file": DEFAULT_OUTPUT_FILE,

        # Create
        "target_dir": ".",
        "templates_dir": os.path.join(get_user_data_dir(), "templates"),

        # Diagnostics
        "log_level": "WARNING",
        "save_log": False,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the configuration from disk merged over the defaults.

    Unknown keys are dropped; a missing or corrupted file yields defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    settings = data.get("settings", {})
    if isinstance(settings, dict):
        for key, value in settings.items():
            if key in config:
                config[key] = value

    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: Settings to save; keys outside the default schema are ignored.
    """
    defaults = get_default_config()
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "settings": {k: v for k, v in config.items() if k in defaults},
    }
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
