"""Utility modules for chatworkhook."""

from chatworkhook.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
