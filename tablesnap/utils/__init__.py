"""
Utility Module for TableSnap.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - File and time helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension, unix_millis

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'unix_millis'
]
