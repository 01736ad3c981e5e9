"""
API Module for TableSnap.

FastAPI application exposing the extraction gateway over HTTP.
"""

from .server import create_app, error_status, error_message

__all__ = ['create_app', 'error_status', 'error_message']
