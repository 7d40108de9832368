"""
Service logger setup

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("order_service")
"""
import logging
import sys
from typing import Optional

from core.config import LoggingConfig


def setup_service_logger(service_name: str, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """Configure root handlers once and return the service logger"""
    config = config or LoggingConfig.from_env()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        formatter = logging.Formatter(config.log_format)
        if config.enable_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(formatter)
            root.addHandler(console)
        if config.log_file:
            file_handler = logging.FileHandler(config.log_file)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    root.setLevel(level)

    logger = logging.getLogger(service_name)
    logger.setLevel(level)
    return logger
