#!/usr/bin/env python3
"""Modular configuration system for the order service

Configuration hierarchy:
- order_config: Required resource identifiers, collaborator endpoints, policy flags
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .order_config import ConfigurationError, OrderServiceConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)


def get_settings() -> OrderServiceConfig:
    """Resolve order service settings from the environment"""
    return OrderServiceConfig.from_env()


__all__ = [
    'ConfigurationError',
    'OrderServiceConfig',
    'LoggingConfig',
    'get_settings',
]
