"""
Table State Module for TableSnap.

Holds the table under review and the edit API the grid drives.

Features:
    - Header-indexed row storage (every row has a slot per header)
    - Atomic header rename, cell update, row add and row delete
    - Full-snapshot change notification
    - Uncertainty marker helpers
"""

from .table_data import (
    TableData,
    UNCERTAINTY_MARKER,
    has_uncertainty,
    strip_uncertainty,
)
from .store import TableStore

__all__ = [
    'TableData',
    'TableStore',
    'UNCERTAINTY_MARKER',
    'has_uncertainty',
    'strip_uncertainty',
]
