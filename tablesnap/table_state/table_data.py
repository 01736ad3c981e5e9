"""
Table Data Class.

This module defines TableData, the in-memory representation of an
extracted table. Rows are stored as header-indexed cell lists so every
row always has exactly one slot per header; the string-keyed record
format used on the wire is produced and consumed only at the boundary.

Author: TableSnap Team
"""

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Literal suffix the model appends to low-confidence (e.g. handwritten) values
UNCERTAINTY_MARKER = "[?]"

# Marker plus any surrounding whitespace, removed on export
_UNCERTAINTY_PATTERN = re.compile(r"\s*\[\?\]\s*")


def has_uncertainty(value: Optional[str]) -> bool:
    """Return True if a cell value carries the uncertainty marker."""
    return bool(value) and UNCERTAINTY_MARKER in value


def strip_uncertainty(value: Optional[str]) -> str:
    """
    Remove every uncertainty marker (and whitespace around it) from a value.

    Example:
        >>> strip_uncertainty("10 [?]")
        "10"
    """
    return _UNCERTAINTY_PATTERN.sub("", value or "")


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _unique_headers(raw_headers: List[Any]) -> List[str]:
    """
    Make incoming header names usable as unique column keys.

    Blank names become ``Column N``; repeated names get a numeric suffix
    (``Amount``, ``Amount 2``, ...).
    """
    headers: List[str] = []
    seen = set()

    for position, raw in enumerate(raw_headers, 1):
        name = _cell_text(raw).strip() or f"Column {position}"
        candidate = name
        suffix = 2
        while candidate in seen:
            candidate = f"{name} {suffix}"
            suffix += 1
        seen.add(candidate)
        headers.append(candidate)

    return headers


@dataclass
class TableData:
    """
    An extracted table: ordered unique headers plus ordered rows.

    Attributes:
        headers: Column names, in display and export order.
        rows: One list of cell strings per row, aligned with ``headers``.

    Example:
        >>> table = TableData.from_dict({
        ...     "headers": ["Item", "Qty"],
        ...     "rows": [{"Item": "Pen", "Qty": "10[?]"}],
        ... })
        >>> table.cell(0, "Qty")
        "10[?]"
    """
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def __post_init__(self):
        width = len(self.headers)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {index} has {len(row)} cells, expected {width}"
                )
        if len(set(self.headers)) != width:
            raise ValueError(f"Header names must be unique: {self.headers}")

    @classmethod
    def from_records(
        cls,
        headers: List[Any],
        records: List[Dict[str, Any]]
    ) -> 'TableData':
        """
        Build a table from a header list and string-keyed row records.

        Missing keys become empty cells; keys that name no header are
        ignored.
        """
        raw_headers = list(headers)
        unique = _unique_headers(raw_headers)
        rows = []

        for record in records:
            record = record or {}
            row = []
            for raw, name in zip(raw_headers, unique):
                key = _cell_text(raw)
                value = record.get(key, record.get(name))
                row.append(_cell_text(value))
            rows.append(row)

        return cls(headers=unique, rows=rows)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TableData':
        """Build a table from the wire format ``{"headers": [...], "rows": [...]}``."""
        return cls.from_records(data.get("headers") or [], data.get("rows") or [])

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def column_index(self, header: str) -> int:
        """
        Position of a header.

        Raises:
            KeyError: If the header does not exist.
        """
        try:
            return self.headers.index(header)
        except ValueError:
            raise KeyError(header) from None

    def cell(self, row_index: int, header: str) -> str:
        return self.rows[row_index][self.column_index(header)]

    def records(self) -> List[Dict[str, str]]:
        """Rows as header-keyed dictionaries, in header order."""
        return [dict(zip(self.headers, row)) for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {"headers": list(self.headers), "rows": self.records()}

    def copy(self) -> 'TableData':
        return copy.deepcopy(self)

    def uncertain_cells(self) -> List[tuple]:
        """Return ``(row_index, header)`` for every flagged cell."""
        return [
            (row_index, header)
            for row_index, row in enumerate(self.rows)
            for header, value in zip(self.headers, row)
            if has_uncertainty(value)
        ]

    def cleaned_rows(self) -> List[List[str]]:
        """Rows with uncertainty markers removed, for export."""
        return [[strip_uncertainty(value) for value in row] for row in self.rows]
