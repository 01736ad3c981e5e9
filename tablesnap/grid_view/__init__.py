"""
Grid View Module for TableSnap.

Headless editable-grid controller and its display-only formatting.

Features:
    - Cell focus, drafts and commit-on-blur
    - Clamped arrow-key navigation, Enter-to-add-row on the last row
    - Header rename with revert on empty or duplicate names
    - Numeric column detection and currency display
"""

from .grid import GridView, GridCell, GridHeader, CellPosition, NavigationKey
from .formatting import NumericColumnDetector, CurrencyFormatter

__all__ = [
    'GridView',
    'GridCell',
    'GridHeader',
    'CellPosition',
    'NavigationKey',
    'NumericColumnDetector',
    'CurrencyFormatter',
]
