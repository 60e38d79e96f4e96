"""
minish Core Module

Process-wide configuration for the shell.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    ConfigValidationError,
    LoggingConfig,
    ShellConfig,
    get_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'ConfigValidationError',
    'LoggingConfig',
    'ShellConfig',
    'get_config',
]
