"""
Log Configuration - Settings for logging behavior
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .config import config

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "timeismoney-console"


@dataclass
class LogConfig:
    """Configuration for logging"""

    log_level: str = "INFO"
    log_to_console: bool = True
    log_format: str = DEFAULT_FORMAT

    @classmethod
    def from_env(cls) -> 'LogConfig':
        """Create config from environment variables; TIM_DEBUG defaults the level to DEBUG"""
        return cls(
            log_level=os.getenv("TIM_LOG_LEVEL", "DEBUG" if config.enable_debug else "INFO"),
            log_to_console=os.getenv("TIM_LOG_CONSOLE", "true").lower() == "true",
            log_format=os.getenv("TIM_LOG_FORMAT", DEFAULT_FORMAT),
        )

    @property
    def level(self) -> int:
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.INFO


def setup_logging(log_config: Optional[LogConfig] = None) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call repeatedly: the console handler is added once and
    later calls only update level and format.
    """
    log_config = log_config or LogConfig.from_env()
    logger = logging.getLogger("timeismoney")
    logger.setLevel(log_config.level)

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if log_config.log_to_console:
        if handler is None:
            handler = logging.StreamHandler()
            handler.set_name(_HANDLER_NAME)
            logger.addHandler(handler)
        handler.setFormatter(logging.Formatter(log_config.log_format))
    elif handler is not None:
        logger.removeHandler(handler)

    return logger
