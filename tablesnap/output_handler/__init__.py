"""
Output Handler Module for TableSnap.

This module exports reviewed tables:
    - CSV files (timestamped, UTF-8)
    - Tab-separated clipboard text
    - Excel workbooks

Uncertainty markers are removed from every exported value.

Author: TableSnap Team
"""

from .handler import OutputHandler
from .csv_exporter import CsvExporter
from .clipboard_exporter import ClipboardExporter
from .excel_exporter import ExcelExporter

__all__ = ['OutputHandler', 'CsvExporter', 'ClipboardExporter', 'ExcelExporter']
