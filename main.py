#!/usr/bin/env python3
"""Main entry point for the Curiosity agent server.

Bootstraps a Uvicorn ASGI server for the FastAPI app built by
curiosity.api.app.create_app. Loads a .env file from the current directory if
present, and optionally a JSON config file passed with --config.
"""

import asyncio
import os
import sys
from argparse import ArgumentParser

# Global flag for graceful shutdown
shutdown_event = asyncio.Event()

if __name__ == "__main__":
    # Parse arguments FIRST so --help works without configuration
    parser = ArgumentParser(description="Start the Curiosity agent server")
    parser.add_argument("--host", help="Bind address. Overrides config and env.")
    parser.add_argument("--port", type=int, help="Port. Overrides config and env.")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument(
        "--log-format",
        choices=["pretty", "json"],
        help="Log format (pretty or json). Overrides config and LOG_FORMAT env var.",
    )
    parser.add_argument(
        "--log-colors",
        type=lambda x: x.lower() in ("true", "1", "yes", "on"),
        help="Enable colored logs (true/false). Overrides config and LOG_COLORS env var.",
    )
    args, _ = parser.parse_known_args()

    # Set logging env vars from CLI flags before logger import
    if args.log_format:
        os.environ["LOG_FORMAT"] = args.log_format
    if args.log_colors is not None:
        os.environ["LOG_COLORS"] = "true" if args.log_colors else "false"

    from dotenv import load_dotenv

    load_dotenv(override=False)

    from curiosity.utils.logger import get_logger

    startup_logger = get_logger("server.startup")

    from curiosity.config import (
        ConfigValidationError,
        configure_settings,
        load_config_file,
    )

    file_config = {}
    if args.config:
        try:
            file_config = load_config_file(args.config)
        except ConfigValidationError as e:
            startup_logger.error("Failed to load configuration", error=str(e))
            sys.exit(1)
    settings = configure_settings(file_config)

    # The server still starts without an api key; /health reports the problem
    config_valid, config_errors = settings.validation_status()
    if not config_valid:
        startup_logger.warning("Configuration incomplete", errors=config_errors)

    import uvicorn

    from curiosity import __version__
    from curiosity.api.app import create_app
    from curiosity.config.logging_config import get_logging_config

    host = args.host or settings.server_host
    port = args.port or settings.server_port

    app = create_app()
    app.state.shutdown_event = shutdown_event

    startup_logger.info(
        "Starting Curiosity agent server",
        version=__version__,
        server_url=f"http://{host}:{port}",
        docs_url=f"http://{host}:{port}/docs",
        model=settings.model,
    )

    # Active streams stop at the next step boundary once uvicorn begins exiting
    class CuriosityServer(uvicorn.Server):
        def handle_exit(self, sig, frame):
            shutdown_event.set()
            super().handle_exit(sig, frame)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_config=get_logging_config(),
        lifespan="on",
        timeout_graceful_shutdown=5,
    )
    CuriosityServer(config).run()
