#!/usr/bin/env python3
"""Service logger setup

Configures the named service logger once per process from LoggingConfig:
a console handler and, when LOG_FILE is set, a file handler.
"""
import logging
import sys
from typing import Optional

from .config.logging_config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Get the logger for a service, attaching handlers on first use.

    Args:
        service_name: Logger name, usually the service package name
        level: Overrides the configured log level
        config: Logging config (loaded from environment if not provided)

    Returns:
        Configured logger
    """
    config = config or LoggingConfig.from_env()
    logger = logging.getLogger(service_name)
    logger.setLevel((level or config.log_level).upper())

    # Calling twice must not duplicate output
    if getattr(logger, "_service_handlers_installed", False):
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    logger._service_handlers_installed = True
    return logger


__all__ = ["setup_service_logger"]
