"""
Extraction API Client Module.

HTTP client for a running TableSnap server. It posts an image to
``/api/extract`` and returns the extracted table, so a review session
can use a remote gateway exactly like a local TableExtractor.

Author: TableSnap Team
"""

from typing import Optional

import requests

from config import get_config
from tablesnap.utils.logger import get_logger
from tablesnap.utils.exceptions import ModelRequestError
from tablesnap.input_handler import ImageUpload
from tablesnap.table_state import TableData
from .extraction_result import ExtractionResult

# Initialize module logger
logger = get_logger(__name__)


class ExtractionClient:
    """
    Client for the ``POST /api/extract`` endpoint.

    Attributes:
        server_url: Base URL of the TableSnap server.
        timeout: Request timeout in seconds.

    Example:
        >>> client = ExtractionClient("http://localhost:8000")
        >>> result = client.extract(upload)
    """

    EXTRACT_PATH = "/api/extract"

    def __init__(
        self,
        server_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ) -> None:
        self.server_url = (
            server_url or get_config("output.client.server_url", "http://localhost:8000")
        ).rstrip("/")
        self.timeout = timeout or get_config("output.client.timeout", 120)
        self.session = session or requests.Session()

    def extract(self, upload: ImageUpload) -> ExtractionResult:
        """
        Send an image to the server for extraction.

        Raises:
            ModelRequestError: On transport failure or any error response,
                carrying the server's message when there is one.
        """
        url = f"{self.server_url}{self.EXTRACT_PATH}"
        files = {
            "image": (upload.filename or "upload", upload.data, upload.media_type)
        }

        try:
            response = self.session.post(url, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Extraction request to {url} failed: {e}")
            raise ModelRequestError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.ok:
            message = body.get("error") or "Failed to extract data"
            logger.error(f"Extraction failed ({response.status_code}): {message}")
            raise ModelRequestError(message)

        if not (body.get("success") and isinstance(body.get("data"), dict)):
            raise ModelRequestError(body.get("error") or "No data extracted")

        return ExtractionResult(
            table=TableData.from_dict(body["data"]),
            source_file=upload.filename,
            media_type=upload.media_type,
        )
