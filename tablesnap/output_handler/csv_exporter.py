"""
CSV Exporter Module.

Serializes the reviewed table to CSV. Only the current headers are
written, in header order, and uncertainty markers are removed from
every value. Quoting follows the csv module's minimal rules: values
containing the delimiter, quotes or line breaks are quoted, and quotes
are doubled.

Author: TableSnap Team
"""

import csv
import io
from pathlib import Path
from typing import Optional, Union

from config import get_config
from tablesnap.utils.logger import get_logger
from tablesnap.utils.helpers import ensure_directory, unix_millis
from tablesnap.utils.exceptions import CsvExportError
from tablesnap.table_state import TableData

# Initialize module logger
logger = get_logger(__name__)


class CsvExporter:
    """
    Exports a TableData snapshot as CSV.

    Attributes:
        output_dir: Directory for exported files.
        filename_prefix: Prefix of generated filenames.

    Example:
        >>> exporter = CsvExporter()
        >>> exporter.to_text(table)
        'Item,Qty\\nPen,10'
        >>> exporter.export(table)
        'outputs/tablesnap-export-1767225600000.csv'
    """

    MEDIA_TYPE = "text/csv"

    def __init__(self, output_dir: Optional[Union[str, Path]] = None) -> None:
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.filename_prefix = get_config("output.csv.filename_prefix", "tablesnap-export")

    def to_text(self, table: TableData) -> str:
        """
        Render the table as CSV text.

        Lines are separated by ``\\n`` with no trailing line break.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(table.headers)
        writer.writerows(table.cleaned_rows())

        text = buffer.getvalue()
        if text.endswith("\n"):
            text = text[:-1]
        return text

    def default_filename(self) -> str:
        """Timestamped filename, ``<prefix>-<unix-ms>.csv``."""
        return f"{self.filename_prefix}-{unix_millis()}.csv"

    def export(
        self,
        table: TableData,
        filename: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Write the table to a UTF-8 CSV file.

        Args:
            table: Table to export.
            filename: Output filename. If None, a timestamped name is used.
            output_dir: Output directory. If None, uses the configured one.

        Returns:
            Path to the written file.

        Raises:
            CsvExportError: If the file cannot be written.
        """
        out_dir = ensure_directory(output_dir or self.output_dir)
        filepath = out_dir / (filename or self.default_filename())

        try:
            with open(filepath, 'w', encoding='utf-8', newline='') as f:
                f.write(self.to_text(table))
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            raise CsvExportError(str(filepath), str(e))

        logger.info(f"CSV file saved: {filepath} ({table.row_count} rows)")
        return str(filepath)
