#!/usr/bin/env python3
"""
Service logger setup

Configures a named logger for a microservice from LoggingConfig.
Safe to call more than once - handlers are only installed the first time.
"""
import logging
import sys
from typing import Optional

from .config.logging_config import LoggingConfig


def setup_service_logger(
    service_name: str, config: Optional[LoggingConfig] = None
) -> logging.Logger:
    """
    Create or fetch the logger for a service.

    Args:
        service_name: Logger name (usually the service package name)
        config: Logging configuration (loaded from env if None)

    Returns:
        Configured logging.Logger
    """
    if config is None:
        config = LoggingConfig.from_env()

    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    if getattr(logger, "_service_configured", False):
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._service_configured = True
    return logger


__all__ = ["setup_service_logger"]
