"""
Resale Dashboard Application

Builds the Flask app that serves the ``/api`` blueprint. Browsers load the
dashboard from another origin, so CORS is enabled for the API routes.
"""

from typing import Any, Dict, Optional

from flask import Flask
from flask_cors import CORS

from hdbtrends.config import get_config
from hdbtrends.api.routes import register_routes
from hdbtrends.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(test_config: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the dashboard API app.

    Args:
        test_config: Flask settings applied last, e.g. ``{"TESTING": True}``.
    """
    setup_logging()
    api_settings = get_config().api

    app = Flask(__name__)
    app.config.update(
        DEBUG=api_settings.debug,
        CACHE_MAX_AGE=api_settings.cache_max_age,
    )
    app.config.update(test_config or {})

    CORS(app, resources={r"/api/*": {"origins": "*"}})
    register_routes(app)

    logger.info("Dashboard API ready (s-maxage=%s)", app.config["CACHE_MAX_AGE"])
    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: Optional[bool] = None):
    """Serve the API with Flask's threaded development server.

    Unset arguments fall back to HDBTRENDS_API_HOST, HDBTRENDS_API_PORT and
    HDBTRENDS_DEBUG.
    """
    api_settings = get_config().api
    host = host or api_settings.host
    port = port or api_settings.port
    debug = api_settings.debug if debug is None else debug

    app = create_app()
    logger.info("Listening on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=debug, threaded=True)
