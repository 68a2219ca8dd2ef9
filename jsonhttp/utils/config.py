import copy
import os
from typing import Any, Dict, Optional

import yaml

from jsonhttp.utils.logger import get_logger

DEFAULT_CONFIG_PATH = "config/config.yaml"
CONFIG_PATH_ENV = "JSONHTTP_CONFIG"

DEFAULT_CONFIG = {
    "logging": {
        "level": "INFO",
        "file": None,
        "colors": True,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5050,
        "debug": False,
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from a YAML file merged over the defaults."""
    logger = get_logger()

    if config_path is None:
        config_path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)

    merged_config = copy.deepcopy(DEFAULT_CONFIG)

    if not os.path.exists(config_path):
        logger.info(
            f"Configuration file {config_path} not found, using default configuration"
        )
        return merged_config

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading configuration: {str(e)}")
        logger.info("Using default configuration")
        return merged_config

    if not isinstance(config, dict):
        logger.error(f"Configuration in {config_path} is not a mapping, ignoring it")
        return merged_config

    logger.info(f"Loaded configuration from {config_path}")
    return _deep_merge(merged_config, config)


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries, updating target with values from source."""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value
    return target
