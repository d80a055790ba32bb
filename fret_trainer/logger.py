"""Centralized lazy-loading logger access for fret_trainer."""
import logging
from typing import Dict

# Module-level cache for loggers
_logger_cache: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Get a lazily initialized logger with the given name.

    Levels and handlers are applied later by ``logging_config.setup_logging``,
    so importing a module never configures logging as a side effect.

    Args:
        name: The full module name (e.g., 'fret_trainer.pitch_detector')

    Returns:
        A logger instance
    """
    if name not in _logger_cache:
        logger = logging.getLogger(name)
        _logger_cache[name] = logger
    return _logger_cache[name]
