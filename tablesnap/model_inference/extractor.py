"""
Table Extractor Module.

This module provides the TableExtractor class, the extraction gateway.
It sends one image plus a fixed instruction prompt to a hosted Gemini
model and turns the reply into a TableData.

Approach:
    A single generate_content call per image. The reply is expected to
    be raw JSON (``{"headers": [...], "rows": [...]}`` or
    ``{"error": "..."}``). There is no retry: failures are reported to
    the caller, who decides what to show the user.

Author: TableSnap Team
"""

import time
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from config import get_config, get_api_key
from tablesnap.utils.logger import get_logger
from tablesnap.utils.exceptions import (
    MissingCredentialError,
    ModelError,
    ModelRequestError,
)
from tablesnap.input_handler import ImageUpload
from .extraction_result import ExtractionResult
from .prompts import EXTRACTION_PROMPT
from .response_parser import parse_model_reply

# Initialize module logger
logger = get_logger(__name__)


class TableExtractor:
    """
    Gemini-backed table extractor.

    The model client is created lazily on the first extraction so that a
    missing API key is reported per request instead of at startup.

    Attributes:
        model_name: Name of the hosted model.
        prompt: Instruction text sent with every image.

    Example:
        >>> extractor = TableExtractor()
        >>> result = extractor.extract(upload)
        >>> print(result.table.headers)
    """

    DEFAULT_MODEL = "gemini-2.5-flash"
    DEFAULT_API_KEY_ENV = "GOOGLE_GENERATIVE_AI_API_KEY"

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
        prompt: str = EXTRACTION_PROMPT
    ) -> None:
        """
        Initialize the extractor.

        Args:
            model_name: Model to call. If None, uses config.
            api_key: API key. If None, read from the environment on use.
            client: Pre-built client exposing ``models.generate_content``.
            prompt: Instruction prompt.
        """
        self.model_name = model_name or get_config("model.name", self.DEFAULT_MODEL)
        self.prompt = prompt
        self._api_key = api_key
        self._client = client

        logger.info(f"TableExtractor initialized with model: {self.model_name}")

    def _get_client(self) -> Any:
        """
        Return the model client, creating it on first use.

        Raises:
            MissingCredentialError: If no API key is configured.
        """
        if self._client is not None:
            return self._client

        api_key = self._api_key or get_api_key()
        if not api_key:
            env_name = get_config("model.api_key_env", self.DEFAULT_API_KEY_ENV)
            raise MissingCredentialError(env_name)

        self._client = genai.Client(api_key=api_key)
        return self._client

    def _generate(self, upload: ImageUpload) -> str:
        client = self._get_client()

        image_part = types.Part.from_bytes(
            data=upload.data,
            mime_type=upload.media_type
        )

        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=[self.prompt, image_part]
            )
        except ModelError:
            raise
        except Exception as e:
            logger.error(f"Model request failed: {e}")
            raise ModelRequestError(str(e)) from e

        return response.text or ""

    def extract(self, upload: ImageUpload) -> ExtractionResult:
        """
        Extract a table from a validated image.

        Args:
            upload: Image accepted by UploadIntake.

        Returns:
            ExtractionResult holding the table.

        Raises:
            MissingCredentialError: If no API key is configured.
            ModelRequestError: If the model call fails.
            NoTableDetectedError: If the model finds no table.
            MalformedModelOutputError: If the reply cannot be used.
        """
        start_time = time.time()
        logger.info(f"Extracting table from {upload.filename or '<upload>'} ({upload.media_type})")

        text = self._generate(upload)
        table = parse_model_reply(text)

        result = ExtractionResult(
            table=table,
            source_file=upload.filename,
            media_type=upload.media_type,
            model_name=self.model_name,
            raw_text=text,
            processing_time=time.time() - start_time
        )

        logger.info(
            f"Extraction complete: {table.row_count} rows x {table.column_count} columns, "
            f"{result.uncertain_count} uncertain cells, "
            f"time: {result.processing_time:.2f}s"
        )
        return result

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the configured model."""
        return {
            'model_name': self.model_name,
            'api_key_env': get_config("model.api_key_env", self.DEFAULT_API_KEY_ENV),
            'client_ready': self._client is not None,
        }
