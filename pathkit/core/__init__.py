"""
pathkit Core Module

Shared infrastructure: configuration loading and logging setup.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    LoggingConfig,
    FilesystemConfig,
    get_config,
)
from .logging_setup import configure_logging

__all__ = [
    'ConfigLoader',
    'Config',
    'LoggingConfig',
    'FilesystemConfig',
    'get_config',
    'configure_logging',
]
