"""
Flask REST API for the resale dashboard.

Provides endpoints for:
- The raw record snapshot
- Filter options
- Dashboard aggregates
"""

from hdbtrends.api.server import create_app
from hdbtrends.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]
