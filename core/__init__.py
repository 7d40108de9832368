#!/usr/bin/env python3
"""
Core Module for the Order Processing Service

Shared infrastructure used by the order service.

COMPONENTS:
    - config/: Environment-driven configuration (dataclasses + python-dotenv)
    - logger.py: Service logger setup

USAGE:
    from core.config import OrderServiceConfig
    from core.logger import setup_service_logger

    config = OrderServiceConfig.from_env()
    logger = setup_service_logger(config.service_name)
"""
