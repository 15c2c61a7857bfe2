#!/usr/bin/env python
"""
CLI for running the Resale Dashboard API Server.

Usage:
    python -m hdbtrends.cli.api_server
    python -m hdbtrends.cli.api_server --port 8080 --preload
    python -m hdbtrends.cli.api_server --snapshot data/resale.csv
"""

import argparse
import sys

from hdbtrends.config import get_config
from hdbtrends.exceptions import HdbTrendsError
from hdbtrends.logging_config import setup_logging, get_logger


def main():
    """Main entry point for the API server CLI."""
    parser = argparse.ArgumentParser(
        description="Resale Dashboard API Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m hdbtrends.cli.api_server
    python -m hdbtrends.cli.api_server --host 0.0.0.0 --port 8080
    python -m hdbtrends.cli.api_server --snapshot resale.json --preload
        """,
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind to (default: from config or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: from config or 5000)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default=None,
        help="Serve records from a CSV/JSON snapshot instead of data.gov.sg",
    )
    parser.add_argument(
        "--preload",
        action="store_true",
        help="Load the record snapshot before accepting requests",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    config = get_config()
    if args.snapshot:
        config.data_source.snapshot_path = args.snapshot
    host = args.host or config.api.host
    port = args.port or config.api.port
    debug = args.debug or config.api.debug

    logger.info("Starting Resale Dashboard API Server")
    logger.info("Host: %s, Port: %d, Debug: %s", host, port, debug)

    try:
        if args.preload:
            from hdbtrends.api.routes import get_service
            get_service()

        from hdbtrends.api.server import run_server
        run_server(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except HdbTrendsError as e:
        logger.error("Could not load records: %s", e.message)
        sys.exit(1)
    except Exception as e:
        logger.error("Server error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
