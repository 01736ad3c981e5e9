"""
Clipboard Exporter Module.

Copies the reviewed table to the system clipboard as tab-separated
text, ready to paste into a spreadsheet application.

Author: TableSnap Team
"""

import re
from typing import Callable, Optional

import pyperclip

from tablesnap.utils.logger import get_logger
from tablesnap.utils.exceptions import ClipboardExportError
from tablesnap.table_state import TableData

# Initialize module logger
logger = get_logger(__name__)

# Tabs and line breaks inside a value would break the pasted grid shape
_SEPARATOR_PATTERN = re.compile(r'[\t\r\n]+')


class ClipboardExporter:
    """
    Exports a TableData snapshot as TSV to the clipboard.

    Attributes:
        writer: Callable that places text on the clipboard.

    Example:
        >>> ClipboardExporter().to_text(table)
        'Item\\tQty\\nPen\\t10'
    """

    def __init__(self, writer: Optional[Callable[[str], None]] = None) -> None:
        self.writer = writer or pyperclip.copy

    @staticmethod
    def _clean(value: str) -> str:
        return _SEPARATOR_PATTERN.sub(' ', value)

    def to_text(self, table: TableData) -> str:
        """Header line plus one tab-separated line per row."""
        lines = ['\t'.join(self._clean(h) for h in table.headers)]
        for row in table.cleaned_rows():
            lines.append('\t'.join(self._clean(value) for value in row))
        return '\n'.join(lines)

    def copy(self, table: TableData) -> str:
        """
        Place the table on the clipboard.

        Returns:
            The text that was copied.

        Raises:
            ClipboardExportError: If the clipboard is unavailable.
        """
        text = self.to_text(table)

        try:
            self.writer(text)
        except pyperclip.PyperclipException as e:
            logger.error(f"Clipboard copy failed: {e}")
            raise ClipboardExportError(str(e))

        logger.info(f"Copied {table.row_count} rows to clipboard")
        return text
