"""
Grid Formatting Module.

This module provides the display-only formatting rules of the grid:
    - Numeric column detection from header text
    - Currency rendering of numeric cells

Neither rule ever changes stored cell text; they only affect what the
grid shows for a cell that is not being edited.

Author: TableSnap Team
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from config import get_config
from tablesnap.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class NumericColumnDetector:
    """
    Decides whether a column holds numbers, based on its header.

    A header is numeric if its lowercased text contains any keyword.
    Matching is plain substring containment, so short keywords such as
    "no" also match headers like "Notes".

    Example:
        >>> detector = NumericColumnDetector()
        >>> detector.is_numeric("Unit Price")
        True
        >>> detector.is_numeric("Description")
        False
    """

    DEFAULT_KEYWORDS = [
        "price", "amount", "qty", "quantity", "total", "cost", "tax", "rate",
        "sum", "subtotal", "discount", "fee", "charge", "balance", "payment",
        "number", "no", "#", "count", "unit", "weight", "size", "percent", "%",
    ]

    def __init__(self, keywords: Optional[List[str]] = None) -> None:
        if keywords is None:
            keywords = get_config("grid.numeric_keywords", self.DEFAULT_KEYWORDS)
        self.keywords = [str(keyword).lower() for keyword in keywords]

    def is_numeric(self, header: str) -> bool:
        lower_header = (header or "").lower()
        return any(keyword in lower_header for keyword in self.keywords)


class CurrencyFormatter:
    """
    Renders numeric cell text as US-dollar currency.

    Dollar signs, thousands separators, whitespace and uncertainty
    markers are removed, then the leading number is parsed. Text without
    a leading number is returned unchanged.

    Example:
        >>> formatter = CurrencyFormatter()
        >>> formatter.format("$1,234.5")
        "$1,234.50"
        >>> formatter.format("10[?]")
        "$10.00"
        >>> formatter.format("n/a")
        "n/a"
    """

    # Leading decimal number, like a lenient float prefix parse
    NUMBER_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
    STRIP_PATTERN = re.compile(r'[$,\s]')
    CENTS = Decimal("0.01")

    def __init__(self, symbol: str = "$") -> None:
        self.symbol = symbol

    def parse(self, value: str) -> Optional[float]:
        """
        Parse the numeric part of a cell value.

        Returns:
            The number, or None if the cleaned text does not start with one.
        """
        cleaned = self.STRIP_PATTERN.sub('', value or '').replace('[?]', '')
        match = self.NUMBER_PATTERN.match(cleaned)
        if not match:
            return None
        try:
            return float(match.group(0))
        except ValueError:
            logger.debug(f"Could not parse amount: {value}")
            return None

    def format(self, value: str) -> str:
        if not value:
            return value

        number = self.parse(value)
        if number is None:
            return value

        if not math.isfinite(number):
            return value

        # Half away from zero on the exact value, keeping the sign of -0.001
        cents = Decimal(abs(number)).quantize(self.CENTS, rounding=ROUND_HALF_UP)
        sign = "-" if math.copysign(1.0, number) < 0 else ""
        return f"{sign}{self.symbol}{cents:,.2f}"
