"""
Configuration loading utilities for the data grid.

This module loads grid configuration (logging, render options and the grid
schema) from YAML with fallback to defaults, and loads standalone grid
schema files in YAML or JSON.
"""

import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging
from copy import deepcopy

from .components import ComponentFactory
from .data_grid import DataGrid, RedrawListener
from .exceptions import ConfigurationLoadError
from .grid_config import GridConfig, GridOptions, default_grid_schema

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


def deep_merge(base_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with update_dict taking precedence.

    Args:
        base_dict: Base dictionary (defaults)
        update_dict: Dictionary to merge in (user config)

    Returns:
        Merged dictionary
    """
    result = deepcopy(base_dict)

    for key, value in update_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Dictionary with default configuration
    """
    return {
        'app': {
            'name': 'Data Grid',
            'version': '1.0.0',
            'debug': False
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        },
        'options': {
            'attachMode': 'full',
            'preview': False,
            'disabled': False,
            'viewOnly': False,
            'name': 'data'
        },
        'grid': default_grid_schema()
    }


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration with fallback to defaults.

    Args:
        config_path: Optional path to config file (defaults to config.yaml)

    Returns:
        Complete configuration dictionary (defaults on any failure)
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    default_config = get_default_config()

    if not config_path.exists():
        logger.warning(f"Configuration file not found: {config_path}")
        logger.info("Using default configuration")
        return default_config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)

        if user_config is None:
            logger.warning(f"Configuration file is empty: {config_path}")
            return default_config

        if not isinstance(user_config, dict):
            logger.error(f"Configuration file is not a valid dictionary: {config_path}")
            logger.info("Using default configuration")
            return default_config

        config = deep_merge(default_config, user_config)

        logger.info(f"Successfully loaded configuration from {config_path}")
        return config

    except yaml.YAMLError as e:
        logger.error(f"YAML parsing error in {config_path}: {e}")
        logger.info("Using default configuration")
        return default_config

    except (IOError, OSError) as e:
        logger.error(f"Failed to read configuration file {config_path}: {e}")
        logger.info("Using default configuration")
        return default_config


def load_grid_config(schema_path: Path) -> GridConfig:
    """
    Load a grid schema from a YAML or JSON file.

    Args:
        schema_path: Path to the schema file

    Returns:
        Validated GridConfig

    Raises:
        ConfigurationLoadError: If the file cannot be read or parsed
        GridConfigError: If the schema fails validation
    """
    schema_path = Path(schema_path)

    try:
        with open(schema_path, 'r', encoding='utf-8') as f:
            if schema_path.suffix.lower() == '.json':
                schema = json.load(f)
            else:
                schema = yaml.safe_load(f)
    except (IOError, OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load grid schema {schema_path}: {e}")
        raise ConfigurationLoadError(schema_path, e) from e

    if schema is None:
        schema = {}
    if not isinstance(schema, dict):
        error = ValueError(f"expected a mapping, got {type(schema).__name__}")
        logger.error(f"Grid schema {schema_path} is not a dictionary")
        raise ConfigurationLoadError(schema_path, error)

    config = GridConfig.from_schema(schema)
    logger.info(f"Loaded grid schema '{config.key}' from {schema_path}")
    return config


def save_config(config: Dict[str, Any], config_path: Optional[Path] = None) -> bool:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary to save
        config_path: Optional path to save to (defaults to config.yaml)

    Returns:
        True if save was successful, False otherwise
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config, f, default_flow_style=False, indent=2, sort_keys=False)

        logger.info(f"Configuration saved to {config_path}")
        return True

    except (IOError, OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to save configuration to {config_path}: {e}")
        return False


def build_grid_from_config(config: Dict[str, Any],
                           factory: Optional[ComponentFactory] = None,
                           on_redraw: Optional[RedrawListener] = None) -> DataGrid:
    """
    Create a data grid from a loaded configuration.

    Args:
        config: Configuration dictionary (see get_default_config)
        factory: Optional component factory for the cells
        on_redraw: Optional redraw listener

    Returns:
        DataGrid built from the 'grid' and 'options' sections
    """
    grid_config = GridConfig.from_schema(config.get('grid', {}))
    options = GridOptions.model_validate(config.get('options', {}))
    return DataGrid(grid_config, options, factory=factory, on_redraw=on_redraw)
