"""
Extraction Result Data Class.

This module defines the result of one extraction call: the table plus
metadata about how it was produced.

Author: TableSnap Team
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from tablesnap.table_state import TableData


@dataclass
class ExtractionResult:
    """
    Represents a successful table extraction.

    Attributes:
        table: The extracted table.
        source_file: Original filename, if known.
        media_type: Media type of the image sent to the model.
        model_name: Name of the model used.
        raw_text: The model's reply, before parsing.
        processing_time: Seconds spent on the model call and parsing.
        extraction_timestamp: When extraction was performed.

    Example:
        >>> result = extractor.extract(upload)
        >>> result.table.headers
        ['Item', 'Qty']
        >>> result.to_response()
        {'success': True, 'data': {...}}
    """
    table: TableData = field(default_factory=TableData)
    source_file: Optional[str] = None
    media_type: Optional[str] = None
    model_name: Optional[str] = None
    raw_text: Optional[str] = None
    processing_time: float = 0.0
    extraction_timestamp: Optional[str] = None

    def __post_init__(self):
        """Initialize timestamp if not provided."""
        if self.extraction_timestamp is None:
            self.extraction_timestamp = datetime.now().isoformat()

    @property
    def uncertain_count(self) -> int:
        """Number of cells the model flagged as uncertain."""
        return len(self.table.uncertain_cells())

    def to_response(self) -> Dict[str, Any]:
        """Body of a successful ``POST /api/extract`` response."""
        return {"success": True, "data": self.table.to_dict()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'table': self.table.to_dict(),
            'source_file': self.source_file,
            'media_type': self.media_type,
            'model_name': self.model_name,
            'processing_time': round(self.processing_time, 3),
            'extraction_timestamp': self.extraction_timestamp,
            'uncertain_count': self.uncertain_count,
        }

    def __repr__(self) -> str:
        return (
            f"ExtractionResult(source='{self.source_file}', "
            f"rows={self.table.row_count}, "
            f"columns={self.table.column_count}, "
            f"uncertain={self.uncertain_count})"
        )
