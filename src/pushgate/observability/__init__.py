"""
Observability - Logging configuration.

Modules:
    logs        - structlog setup for the CLI
"""

from pushgate.observability.logs import configure_logging

__all__ = ["configure_logging"]
