"""
Logging Setup

Applies the 'logging' section of the configuration to the pathkit
loggers.
"""

from typing import Optional

from pathkit.core.config_loader import Config, get_config
from pathkit.logger import Logger, LogLevel, get_logger


def configure_logging(config: Optional[Config] = None) -> None:
    """
    Initialize pathkit logging from configuration.

    Args:
        config: Configuration to apply; the loaded global one by default
    """
    config = config or get_config()

    level_map = {
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
    }

    level = level_map.get(config.logging.level, LogLevel.INFO)

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
    )

    get_logger('setup').info(
        "Logging configured",
        context={'level': config.logging.level, 'log_file': config.logging.log_file}
    )
