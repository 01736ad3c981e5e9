"""
Main Output Handler Module.

This module provides the unified OutputHandler class that dispatches a
table snapshot to the requested export format.

Author: TableSnap Team
"""

from pathlib import Path
from typing import Callable, Optional, Union

from tablesnap.utils.logger import get_logger
from tablesnap.table_state import TableData
from .csv_exporter import CsvExporter
from .clipboard_exporter import ClipboardExporter
from .excel_exporter import ExcelExporter

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified exporter for reviewed tables.

    All exports are read-only: they work on the snapshot they are given
    and never touch the store it came from.

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(table, "csv")
        'outputs/tablesnap-export-1767225600000.csv'
        >>> handler.to_clipboard(table)
    """

    FORMATS = ('csv', 'tsv', 'xlsx')

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        clipboard_writer: Optional[Callable[[str], None]] = None
    ) -> None:
        self.output_dir = output_dir
        self._clipboard_writer = clipboard_writer

        # Initialize exporters (lazy loading)
        self._csv_exporter = None
        self._clipboard_exporter = None
        self._excel_exporter = None

    @property
    def csv_exporter(self) -> CsvExporter:
        if self._csv_exporter is None:
            self._csv_exporter = CsvExporter(self.output_dir)
        return self._csv_exporter

    @property
    def clipboard_exporter(self) -> ClipboardExporter:
        if self._clipboard_exporter is None:
            self._clipboard_exporter = ClipboardExporter(self._clipboard_writer)
        return self._clipboard_exporter

    @property
    def excel_exporter(self) -> ExcelExporter:
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter(self.output_dir)
        return self._excel_exporter

    def to_csv(self, table: TableData, filename: Optional[str] = None) -> str:
        return self.csv_exporter.export(table, filename)

    def to_excel(self, table: TableData, filename: Optional[str] = None) -> str:
        return self.excel_exporter.export(table, filename)

    def to_clipboard(self, table: TableData) -> str:
        return self.clipboard_exporter.copy(table)

    def save(
        self,
        table: TableData,
        fmt: str = 'csv',
        filename: Optional[str] = None
    ) -> str:
        """
        Export a table in the given format.

        Args:
            table: Table snapshot.
            fmt: ``csv`` or ``xlsx`` write a file; ``tsv`` copies to the
                clipboard.
            filename: Output filename for file formats.

        Returns:
            Path of the written file, or the copied text for ``tsv``.

        Raises:
            ValueError: If the format is unknown.
        """
        fmt = fmt.lower()
        logger.debug(f"Exporting {table.row_count} rows as {fmt}")

        if fmt == 'csv':
            return self.to_csv(table, filename)
        if fmt == 'xlsx':
            return self.to_excel(table, filename)
        if fmt == 'tsv':
            return self.to_clipboard(table)

        raise ValueError(f"Unknown export format: {fmt} (expected one of {self.FORMATS})")
