"""
SwiftGuard - Main Entry Point

This module provides the main entry point for running the SwiftGuard API.
"""

import argparse
import logging
import os
import sys

from .api.rest import run_server
from .core.config import (
    CONFIG_FILE_ENV,
    Config,
    Environment,
    LogLevel,
    load_config,
    set_config,
)
from .core.exceptions import ConfigurationException
from .core.structured_logging import setup_logging


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SwiftGuard - MT103 parsing and compliance validation service"
    )

    # Server configuration
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="REST API port")

    # Environment
    parser.add_argument(
        "--development", action="store_true", help="Run in development mode"
    )
    parser.add_argument(
        "--reload", action="store_true", help="Enable hot reloading (dev only)"
    )

    # Logging
    parser.add_argument(
        "--log-level",
        type=str,
        choices=[level.value for level in LogLevel],
        help="Log level",
    )
    parser.add_argument(
        "--structured-logs", action="store_true", help="Emit JSON log lines"
    )

    # Configuration
    parser.add_argument("--config", type=str, help="Configuration file path")

    return parser


def main(argv=None):
    """Main entry point for SwiftGuard."""
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else Config.load_from_env()
    except ConfigurationException as e:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        sys.exit(2)

    # Override config with CLI arguments
    if args.host:
        config.api.host = args.host
    if args.port:
        config.api.port = args.port
    if args.log_level:
        config.log_level = LogLevel(args.log_level)
    if args.structured_logs:
        config.structured_logging = True
    if args.development:
        config.environment = Environment.DEVELOPMENT
        config.debug = True

    setup_logging(config.log_level.value, config.structured_logging)
    logger = logging.getLogger(__name__)

    try:
        config.validate()
        set_config(config)

        logger.info("Starting SwiftGuard...")
        logger.info(f"Version: {config.version}")
        logger.info(f"Python: {sys.version}")
        logger.info(f"Mode: {'Development' if args.development else 'Production'}")

        reload = args.development and args.reload
        if reload and args.config:
            # Reloaded workers build their own config
            os.environ[CONFIG_FILE_ENV] = os.path.abspath(args.config)

        run_server(config, reload=reload)

    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to start SwiftGuard: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
