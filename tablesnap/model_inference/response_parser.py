"""
Model Response Parser Module.

Turns the model's text reply into a TableData, or raises the error that
describes what went wrong. The model is told not to wrap its reply in
code fences, but fences are removed anyway before parsing.

Author: TableSnap Team
"""

import json
from typing import Any, Dict

from tablesnap.utils.logger import get_logger
from tablesnap.utils.exceptions import (
    MalformedModelOutputError,
    NoTableDetectedError,
)
from tablesnap.table_state import TableData

# Initialize module logger
logger = get_logger(__name__)

PARSE_FAILURE_MESSAGE = (
    "Failed to parse AI response. The image might not contain a valid table."
)
INVALID_STRUCTURE_MESSAGE = "Invalid response structure from AI"


def strip_code_fences(text: str) -> str:
    """
    Remove a leading ```json / ``` fence and a trailing ``` fence.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _validate_shape(data: Any, raw_text: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedModelOutputError(INVALID_STRUCTURE_MESSAGE, raw_text)

    if data.get("error"):
        raise NoTableDetectedError(str(data["error"]))

    headers, rows = data.get("headers"), data.get("rows")
    if headers is None or rows is None:
        raise MalformedModelOutputError(INVALID_STRUCTURE_MESSAGE, raw_text)

    if not isinstance(headers, list) or not isinstance(rows, list):
        raise MalformedModelOutputError(INVALID_STRUCTURE_MESSAGE, raw_text)

    if not all(isinstance(row, dict) for row in rows):
        raise MalformedModelOutputError(INVALID_STRUCTURE_MESSAGE, raw_text)

    return data


def parse_model_reply(text: str) -> TableData:
    """
    Parse and validate a model reply.

    Args:
        text: Raw text returned by the model.

    Returns:
        The extracted table.

    Raises:
        NoTableDetectedError: The model returned ``{"error": ...}``.
        MalformedModelOutputError: The reply is not JSON, or lacks
            ``headers``/``rows``.
    """
    cleaned = strip_code_fences(text)

    try:
        data = json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"JSON parse error: {e}")
        logger.error(f"Raw response: {text}")
        raise MalformedModelOutputError(PARSE_FAILURE_MESSAGE, text) from e

    try:
        data = _validate_shape(data, text)
    except MalformedModelOutputError:
        logger.error(f"Unexpected response structure. Raw response: {text}")
        raise

    return TableData.from_dict(data)
