"""Utility modules for Zenithal.

Provides:
- logger: get_logger for logging
"""

from zenithal.utils.logger import get_logger

__all__ = [
    "get_logger",
]
