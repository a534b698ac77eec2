"""
Logging setup driven by the 'logging' configuration section.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logging_level(level_str):
    """Map string logging level to logging constant."""
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    if not isinstance(level_str, str):
        return logging.INFO
    return level_map.get(level_str.upper(), logging.INFO)


def configure_logging(config: Optional[Dict[str, Any]] = None) -> int:
    """
    Configure root logging from the configuration.

    Args:
        config: Full configuration dictionary with an optional 'logging' section

    Returns:
        The logging level that was applied
    """
    try:
        logging_section = (config or {}).get('logging', {}) or {}
        level_str = logging_section.get('level', 'INFO')
        log_format = logging_section.get('format', DEFAULT_LOG_FORMAT)
        log_level = get_logging_level(level_str)
        logging.basicConfig(level=log_level, format=log_format)
        logger.info(f"Logging configured to level: {level_str}")
        return log_level
    except (AttributeError, TypeError, ValueError) as e:
        # Fallback to INFO if the section is malformed
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Failed to configure logging from config: {e}, using INFO level")
        return logging.INFO
