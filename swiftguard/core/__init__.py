"""
SwiftGuard - Core Module

This module provides the core infrastructure for SwiftGuard including
configuration management, exception handling and structured logging.
"""

from .config import Config, get_config, set_config, load_config
from .exceptions import (
    SwiftGuardException,
    ConfigurationException,
    SchemaException,
    MalformedInputException,
    LedgerException,
    GeneratorException,
)

__version__ = "1.0.0"
__all__ = [
    "Config",
    "get_config",
    "set_config",
    "load_config",
    "SwiftGuardException",
    "ConfigurationException",
    "SchemaException",
    "MalformedInputException",
    "LedgerException",
    "GeneratorException",
]
