"""
HTTP API Module.

FastAPI application exposing the extraction gateway.

Endpoints:
    POST /api/extract     multipart ``image`` -> {success, data} or {error}
    POST /api/export/csv  {headers, rows} -> text/csv attachment
    GET  /api/health      liveness and configured model

Author: TableSnap Team
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from config import get_config
from tablesnap.utils.logger import get_logger
from tablesnap.utils.exceptions import (
    ConfigurationError,
    InputError,
    MalformedModelOutputError,
    MissingUploadError,
    NoTableDetectedError,
    TableSnapError,
)
from tablesnap.input_handler import UploadIntake
from tablesnap.model_inference import TableExtractor
from tablesnap.output_handler import CsvExporter
from tablesnap.table_state import TableData

# Initialize module logger
logger = get_logger(__name__)


class TablePayload(BaseModel):
    headers: List[str]
    rows: List[Dict[str, Any]] = Field(default_factory=list)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def error_status(error: TableSnapError) -> int:
    """HTTP status for a TableSnap error: 400 for the user's input, 500 otherwise."""
    if isinstance(error, (InputError, NoTableDetectedError)):
        return 400
    return 500


def error_message(error: TableSnapError) -> str:
    if isinstance(error, (InputError, NoTableDetectedError,
                          ConfigurationError, MalformedModelOutputError)):
        return error.message
    return f"Failed to process image: {error.message}"


def create_app(
    extractor: Optional[TableExtractor] = None,
    intake: Optional[UploadIntake] = None,
    csv_exporter: Optional[CsvExporter] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        extractor: Gateway used for extraction. Defaults to a
            TableExtractor configured from settings.
        intake: Upload validator.
        csv_exporter: CSV serializer for the export endpoint.

    Returns:
        Configured FastAPI app.
    """
    app = FastAPI(
        title="TableSnap API",
        version=get_config("project.version", "1.0.0")
    )
    app.state.extractor = extractor or TableExtractor()
    app.state.intake = intake or UploadIntake()
    app.state.csv_exporter = csv_exporter or CsvExporter()

    @app.get("/api/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok", "model": app.state.extractor.model_name}

    @app.post("/api/extract")
    async def extract(image: Optional[UploadFile] = File(None)):
        try:
            if image is None:
                raise MissingUploadError()

            data = await image.read()
            upload = app.state.intake.accept(data, image.filename, image.content_type)
            result = await run_in_threadpool(app.state.extractor.extract, upload)

        except TableSnapError as e:
            status = error_status(e)
            if status >= 500:
                logger.error(f"API error: {e}")
            else:
                logger.warning(f"Rejected extraction request: {e.message}")
            return _error_response(error_message(e), status)

        except Exception as e:
            logger.exception(f"API error: {e}")
            return _error_response(f"Failed to process image: {e}", 500)

        return result.to_response()

    @app.post("/api/export/csv")
    async def export_csv(payload: TablePayload) -> Response:
        exporter: CsvExporter = app.state.csv_exporter
        table = TableData.from_records(payload.headers, payload.rows)
        filename = exporter.default_filename()

        return Response(
            content=exporter.to_text(table),
            media_type=f"{CsvExporter.MEDIA_TYPE}; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app
