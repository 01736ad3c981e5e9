"""
Excel Exporter Module.

This module provides Excel file generation for reviewed tables.
Uses openpyxl for modern Excel format support.

Features:
    - Formatted header row
    - Right-aligned numeric columns
    - Auto column width
    - Frozen header row

Author: TableSnap Team
"""

from pathlib import Path
from typing import Optional, Union

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from config import get_config
from tablesnap.utils.logger import get_logger
from tablesnap.utils.helpers import ensure_directory, unix_millis
from tablesnap.utils.exceptions import ExcelExportError
from tablesnap.table_state import TableData
from tablesnap.grid_view.formatting import NumericColumnDetector

# Initialize module logger
logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports a TableData snapshot to an .xlsx workbook.

    Values are written as text with uncertainty markers removed, exactly
    like the CSV export.

    Attributes:
        output_dir: Directory for output files
        sheet_name: Title of the data sheet

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(table)
        >>> print(f"Saved to: {filepath}")
    """

    MAX_COLUMN_WIDTH = 50

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        detector: Optional[NumericColumnDetector] = None
    ) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.sheet_name = get_config("output.excel.sheet_name", "Extracted Data")
        self.filename_prefix = get_config("output.csv.filename_prefix", "tablesnap-export")
        self.detector = detector or NumericColumnDetector()

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def default_filename(self) -> str:
        return f"{self.filename_prefix}-{unix_millis()}.xlsx"

    def build_workbook(self, table: TableData) -> openpyxl.Workbook:
        """
        Build a workbook holding the table on a single styled sheet.

        Args:
            table: Table to write.

        Returns:
            The populated workbook (not saved).
        """
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = self.sheet_name

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        numeric = [self.detector.is_numeric(h) for h in table.headers]

        for col, header in enumerate(table.headers, 1):
            cell = sheet.cell(row=1, column=col, value=header)
            cell.data_type = 's'
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = thin_border

        for row_num, row in enumerate(table.cleaned_rows(), 2):
            for col, value in enumerate(row, 1):
                cell = sheet.cell(row=row_num, column=col, value=value)
                # Cell text is data; never let "=..." become a formula
                cell.data_type = 's'
                cell.border = thin_border
                if numeric[col - 1]:
                    cell.alignment = Alignment(horizontal="right")

        for col, header in enumerate(table.headers, 1):
            max_length = len(header)
            for row_num in range(2, table.row_count + 2):
                cell_value = sheet.cell(row=row_num, column=col).value
                if cell_value:
                    max_length = max(max_length, len(str(cell_value)))
            width = min(max_length + 2, self.MAX_COLUMN_WIDTH)
            sheet.column_dimensions[get_column_letter(col)].width = width

        sheet.freeze_panes = 'A2'
        return workbook

    def export(
        self,
        table: TableData,
        filename: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Export a table to an Excel file.

        Args:
            table: Table to export.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If export fails.
        """
        out_dir = ensure_directory(output_dir or self.output_dir)
        filepath = out_dir / (filename or self.default_filename())

        try:
            workbook = self.build_workbook(table)
            workbook.save(filepath)
        except (OSError, IllegalCharacterError) as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({table.row_count} rows)")
        return str(filepath)
