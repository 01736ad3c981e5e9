"""
Review Session Module.

This module provides ReviewSession, which walks one upload through the
application phases:

    IDLE ──submit──▶ PROCESSING ──success──▶ WORKSPACE ──reset──▶ IDLE
                          │
                          └──failure──▶ ERROR ──retry/reset──▶ IDLE

The session owns the TableStore and GridView while in WORKSPACE and
drops them on reset. A failed extraction never leaves a partial table.

Author: TableSnap Team
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from tablesnap.utils.logger import get_logger
from tablesnap.utils.exceptions import (
    InputError,
    InvalidTransitionError,
    TableSnapError,
)
from tablesnap.input_handler import UploadIntake, ImageUpload
from tablesnap.table_state import TableData, TableStore
from tablesnap.grid_view import GridView
from tablesnap.output_handler import OutputHandler

# Initialize module logger
logger = get_logger(__name__)


class AppPhase(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    WORKSPACE = "workspace"
    ERROR = "error"


TRANSITIONS: Dict[AppPhase, FrozenSet[AppPhase]] = {
    AppPhase.IDLE: frozenset({AppPhase.PROCESSING}),
    AppPhase.PROCESSING: frozenset({AppPhase.WORKSPACE, AppPhase.ERROR}),
    AppPhase.WORKSPACE: frozenset({AppPhase.IDLE}),
    AppPhase.ERROR: frozenset({AppPhase.IDLE}),
}


class ReviewSession:
    """
    One upload-review-export cycle.

    Attributes:
        gateway: Object with ``extract(upload)`` returning an
            ExtractionResult (a TableExtractor or an ExtractionClient).
        phase: Current AppPhase.
        upload: The image being reviewed.
        table: Latest table snapshot published by the store.
        error: Message shown in the ERROR phase.
        input_error: Message for an upload rejected before extraction.

    Example:
        >>> session = ReviewSession(TableExtractor())
        >>> session.submit_file("receipt.png")
        <AppPhase.WORKSPACE: 'workspace'>
        >>> session.grid.rename_header(0, "Product")
        >>> session.export_csv()
    """

    GENERIC_ERROR = "An error occurred"

    def __init__(
        self,
        gateway: Any,
        intake: Optional[UploadIntake] = None,
        output_handler: Optional[OutputHandler] = None,
        format_currency: Optional[bool] = None
    ) -> None:
        self.gateway = gateway
        self.intake = intake or UploadIntake()
        self.output_handler = output_handler or OutputHandler()
        self.format_currency = format_currency

        self.phase = AppPhase.IDLE
        self.upload: Optional[ImageUpload] = None
        self.store: Optional[TableStore] = None
        self.grid: Optional[GridView] = None
        self.table: Optional[TableData] = None
        self.error: Optional[str] = None
        self.input_error: Optional[str] = None

    def _transition(self, target: AppPhase) -> None:
        if target not in TRANSITIONS[self.phase]:
            raise InvalidTransitionError(self.phase.value, target.value)
        logger.debug(f"Session phase {self.phase.value} -> {target.value}")
        self.phase = target

    def _on_table_change(self, table: TableData) -> None:
        self.table = table

    @property
    def preview_url(self) -> Optional[str]:
        return self.upload.data_url if self.upload else None

    def submit(
        self,
        data: Optional[bytes],
        filename: Optional[str] = None,
        declared_type: Optional[str] = None
    ) -> AppPhase:
        """
        Validate an image and run extraction.

        An invalid upload is reported in ``input_error`` and the session
        stays IDLE without calling the gateway.

        Returns:
            The phase after the attempt.

        Raises:
            InvalidTransitionError: If the session is not IDLE.
        """
        if self.phase is not AppPhase.IDLE:
            raise InvalidTransitionError(self.phase.value, AppPhase.PROCESSING.value)

        try:
            upload = self.intake.accept(data, filename, declared_type)
        except InputError as e:
            self.input_error = e.message
            return self.phase

        return self._run(upload)

    def submit_file(self, filepath: Union[str, Path]) -> AppPhase:
        """Like submit(), reading the image from disk."""
        if self.phase is not AppPhase.IDLE:
            raise InvalidTransitionError(self.phase.value, AppPhase.PROCESSING.value)

        try:
            upload = self.intake.load(filepath)
        except InputError as e:
            self.input_error = e.message
            return self.phase

        return self._run(upload)

    def _run(self, upload: ImageUpload) -> AppPhase:
        self.input_error = None
        self.error = None
        self.upload = upload
        self._transition(AppPhase.PROCESSING)

        try:
            result = self.gateway.extract(upload)
        except TableSnapError as e:
            logger.error(f"Extraction error: {e}")
            return self._fail(e.message)
        except Exception as e:
            logger.exception(f"Unexpected extraction error: {e}")
            return self._fail(str(e) or self.GENERIC_ERROR)

        self.store = TableStore(result.table, on_change=self._on_table_change)
        self.grid = GridView(self.store, format_currency=self.format_currency)
        self.table = self.store.snapshot()
        self._transition(AppPhase.WORKSPACE)

        logger.info(
            f"Workspace ready: {self.table.row_count} rows, "
            f"{self.table.column_count} columns"
        )
        return self.phase

    def _fail(self, message: str) -> AppPhase:
        self.error = message or self.GENERIC_ERROR
        self._transition(AppPhase.ERROR)
        return self.phase

    def reset(self) -> AppPhase:
        """Discard the upload and table and return to IDLE."""
        if self.phase is AppPhase.IDLE:
            self.input_error = None
            return self.phase

        self._transition(AppPhase.IDLE)
        self.upload = None
        self.store = None
        self.grid = None
        self.table = None
        self.error = None
        self.input_error = None
        return self.phase

    def retry(self) -> AppPhase:
        """Leave the ERROR phase; the user starts again with a new upload."""
        if self.phase is not AppPhase.ERROR:
            raise InvalidTransitionError(self.phase.value, AppPhase.IDLE.value)
        return self.reset()

    def _require_workspace(self) -> TableData:
        if self.phase is not AppPhase.WORKSPACE:
            raise InvalidTransitionError(self.phase.value, AppPhase.WORKSPACE.value)
        # Pending cell text is committed before a snapshot is exported.
        self.grid.blur()
        return self.store.snapshot()

    def export_csv(self, filename: Optional[str] = None) -> str:
        return self.output_handler.to_csv(self._require_workspace(), filename)

    def export_excel(self, filename: Optional[str] = None) -> str:
        return self.output_handler.to_excel(self._require_workspace(), filename)

    def copy_to_clipboard(self) -> str:
        return self.output_handler.to_clipboard(self._require_workspace())
