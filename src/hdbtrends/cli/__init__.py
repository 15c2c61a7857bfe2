"""
Command-line interface modules.

Provides CLI entry points for:
- api_server: Start the REST API
- report: Print dashboard aggregates for a snapshot
"""
