"""
Model Inference Module for TableSnap.

This module is the extraction gateway: it sends an image to a hosted
Gemini model and turns the JSON reply into a table.

Features:
    - Fixed instruction prompt with uncertainty flagging
    - Code-fence stripping before JSON parsing
    - Shape validation with distinct no-table / malformed errors
    - HTTP client for a remote TableSnap server

Author: TableSnap Team
"""

from .extractor import TableExtractor
from .extraction_result import ExtractionResult
from .response_parser import parse_model_reply, strip_code_fences
from .client import ExtractionClient

__all__ = [
    'TableExtractor',
    'ExtractionResult',
    'ExtractionClient',
    'parse_model_reply',
    'strip_code_fences',
]
