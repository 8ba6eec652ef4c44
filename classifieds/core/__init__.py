"""
Core utilities and configuration for the classifieds marketplace.

This package provides core functionality including logging configuration,
security helpers, domain errors and database setup.
"""

from classifieds.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
