"""
Grid View Module.

This module provides GridView, a headless controller for the editable
table. It owns the interaction state a spreadsheet-like widget needs
(focused cell, in-progress cell text, header being renamed) and turns
user input into TableStore operations.

Interaction model:
    - Focusing a cell shows its raw text and starts a draft.
    - Typing replaces the draft; the draft is committed when focus leaves
      the cell (another cell, blur, row add/delete).
    - Arrow keys move focus one cell, clamped at the grid edges.
    - Enter moves down one row; on the last row it appends a row and
      focuses the same column of the new row.

Author: TableSnap Team
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Union

from config import get_config
from tablesnap.utils.logger import get_logger
from tablesnap.table_state import TableStore, has_uncertainty
from .formatting import NumericColumnDetector, CurrencyFormatter

# Initialize module logger
logger = get_logger(__name__)


class NavigationKey(str, Enum):
    """Keys the grid reacts to, named like browser key events."""
    UP = "ArrowUp"
    DOWN = "ArrowDown"
    LEFT = "ArrowLeft"
    RIGHT = "ArrowRight"
    ENTER = "Enter"
    ESCAPE = "Escape"


class CellPosition(NamedTuple):
    row: int
    column: int


@dataclass
class GridCell:
    """
    Render model for one body cell.

    Attributes:
        cell_id: Stable element id, ``cell-<row>-<column>``.
        row: Row index.
        column: Column index.
        header: Column header.
        raw: Stored text (or the draft, if the cell is being edited).
        display: Text to show.
        flagged: Whether the text carries the uncertainty marker.
        numeric: Whether the column is numeric (right-aligned).
        focused: Whether the cell has focus.
    """
    cell_id: str
    row: int
    column: int
    header: str
    raw: str
    display: str
    flagged: bool
    numeric: bool
    focused: bool = False


@dataclass
class GridHeader:
    """Render model for one header cell."""
    column: int
    name: str
    numeric: bool
    editing: bool = False
    draft: Optional[str] = None


class GridView:
    """
    Headless editable-grid controller bound to a TableStore.

    Attributes:
        store: The table store all edits are applied to.
        format_currency: Whether numeric cells are shown as currency.
        focus: Currently focused cell, or None.
        draft: Text typed into the focused cell, not yet committed.

    Example:
        >>> grid = GridView(store)
        >>> grid.focus_cell(0, 1)
        >>> grid.edit("12")
        >>> grid.handle_key("Enter")   # commits "12", moves down
    """

    EMPTY_MESSAGE = "NO DATA TO DISPLAY"

    def __init__(
        self,
        store: TableStore,
        format_currency: Optional[bool] = None,
        detector: Optional[NumericColumnDetector] = None,
        formatter: Optional[CurrencyFormatter] = None
    ) -> None:
        self.store = store
        self.format_currency = (
            format_currency if format_currency is not None
            else get_config("grid.format_currency", False)
        )
        self.detector = detector or NumericColumnDetector()
        self.formatter = formatter or CurrencyFormatter()

        self.focus: Optional[CellPosition] = None
        self.draft: Optional[str] = None

        self.editing_header: Optional[int] = None
        self.header_draft: Optional[str] = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self.store.row_count == 0

    @staticmethod
    def cell_id(row: int, column: int) -> str:
        return f"cell-{row}-{column}"

    def header_at(self, column: int) -> str:
        return self.store.headers[column]

    def is_numeric_column(self, column: int) -> bool:
        return self.detector.is_numeric(self.header_at(column))

    def raw_value(self, row: int, column: int) -> str:
        if self.focus == (row, column) and self.draft is not None:
            return self.draft
        return self.store.cell(row, self.header_at(column))

    def display_value(self, row: int, column: int) -> str:
        """
        Text shown for a cell.

        A focused cell always shows its raw text so it can be edited;
        other numeric cells are currency-formatted when enabled.
        """
        raw = self.raw_value(row, column)
        if self.focus == (row, column):
            return raw
        if self.format_currency and self.is_numeric_column(column):
            return self.formatter.format(raw)
        return raw

    def is_flagged(self, row: int, column: int) -> bool:
        return has_uncertainty(self.raw_value(row, column))

    def header_cells(self) -> List[GridHeader]:
        cells = []
        for column, name in enumerate(self.store.headers):
            editing = self.editing_header == column
            cells.append(GridHeader(
                column=column,
                name=name,
                numeric=self.detector.is_numeric(name),
                editing=editing,
                draft=self.header_draft if editing else None,
            ))
        return cells

    def render(self) -> List[List[GridCell]]:
        """Build the render model for every body cell, row by row."""
        numeric = [self.detector.is_numeric(h) for h in self.store.headers]
        grid = []
        for row in range(self.store.row_count):
            cells = []
            for column, header in enumerate(self.store.headers):
                raw = self.raw_value(row, column)
                cells.append(GridCell(
                    cell_id=self.cell_id(row, column),
                    row=row,
                    column=column,
                    header=header,
                    raw=raw,
                    display=self.display_value(row, column),
                    flagged=has_uncertainty(raw),
                    numeric=numeric[column],
                    focused=self.focus == (row, column),
                ))
            grid.append(cells)
        return grid

    # ------------------------------------------------------------------
    # Cell editing and focus
    # ------------------------------------------------------------------

    def _check_position(self, row: int, column: int) -> None:
        if not 0 <= row < self.store.row_count:
            raise IndexError(f"Row index out of range: {row}")
        if not 0 <= column < self.store.column_count:
            raise IndexError(f"Column index out of range: {column}")

    def focus_cell(self, row: int, column: int) -> CellPosition:
        """
        Move focus to a cell, committing any draft in the previous one.

        Raises:
            IndexError: If the position is outside the grid.
        """
        self._check_position(row, column)
        target = CellPosition(row, column)

        if self.focus == target:
            return target

        self.blur()
        self.focus = target
        self.draft = self.store.cell(row, self.header_at(column))
        return target

    def edit(self, value: str) -> None:
        """Replace the draft text of the focused cell."""
        if self.focus is None:
            raise RuntimeError("No cell has focus")
        self.draft = value

    def blur(self) -> None:
        """Commit the draft of the focused cell and clear focus."""
        if self.focus is None:
            return

        position, draft = self.focus, self.draft
        self.focus = None
        self.draft = None

        if draft is not None:
            self.store.update_cell(position.row, self.header_at(position.column), draft)

    def handle_key(
        self,
        key: Union[str, NavigationKey]
    ) -> Optional[CellPosition]:
        """
        Apply a navigation key to the focused cell.

        Args:
            key: One of ArrowUp/ArrowDown/ArrowLeft/ArrowRight/Enter.
                Other keys are ignored.

        Returns:
            The focused position after the key is handled, or None if
            no cell had focus.
        """
        if self.focus is None:
            return None

        try:
            key = NavigationKey(key)
        except ValueError:
            return self.focus

        row, column = self.focus
        last_row = self.store.row_count - 1
        last_column = self.store.column_count - 1

        if key is NavigationKey.UP:
            row = max(0, row - 1)
        elif key is NavigationKey.DOWN:
            row = min(last_row, row + 1)
        elif key is NavigationKey.LEFT:
            column = max(0, column - 1)
        elif key is NavigationKey.RIGHT:
            column = min(last_column, column + 1)
        elif key is NavigationKey.ENTER:
            if row == last_row:
                self.blur()
                new_row = self.store.add_row()
                return self.focus_cell(new_row, column)
            row += 1
        else:
            return self.focus

        return self.focus_cell(row, column)

    # ------------------------------------------------------------------
    # Row operations
    # ------------------------------------------------------------------

    def add_row(self) -> int:
        """Commit any draft and append an empty row."""
        self.blur()
        return self.store.add_row()

    def delete_row(self, row: int) -> None:
        """Commit any draft and delete a row."""
        self.blur()
        self.store.delete_row(row)

    def toggle_currency(self) -> bool:
        self.format_currency = not self.format_currency
        return self.format_currency

    # ------------------------------------------------------------------
    # Header renaming
    # ------------------------------------------------------------------

    def begin_header_edit(self, column: int) -> None:
        if not 0 <= column < self.store.column_count:
            raise IndexError(f"Column index out of range: {column}")
        self.editing_header = column
        self.header_draft = self.header_at(column)

    def edit_header(self, value: str) -> None:
        if self.editing_header is None:
            raise RuntimeError("No header is being edited")
        self.header_draft = value

    def commit_header(self) -> bool:
        """
        Finish renaming the header being edited.

        The trimmed draft is applied when it is non-empty, differs from
        the current name and is not already used by another column;
        otherwise the header keeps its current name.

        Returns:
            True if the header was renamed.
        """
        if self.editing_header is None:
            return False

        column, draft = self.editing_header, self.header_draft or ""
        self.editing_header = None
        self.header_draft = None

        renamed = self.store.rename_header(self.header_at(column), draft)
        if not renamed:
            logger.debug(f"Header {column} kept as '{self.header_at(column)}'")
        return renamed

    def cancel_header_edit(self) -> None:
        self.editing_header = None
        self.header_draft = None

    def handle_header_key(self, key: Union[str, NavigationKey]) -> bool:
        """
        Keys while a header is being edited: Enter commits, Escape cancels.

        Returns:
            True if the header was renamed.
        """
        if key == NavigationKey.ENTER:
            return self.commit_header()
        if key == NavigationKey.ESCAPE:
            self.cancel_header_edit()
        return False

    def rename_header(self, column: int, value: str) -> bool:
        """Rename a header in one step (begin, edit, commit)."""
        self.begin_header_edit(column)
        self.edit_header(value)
        return self.commit_header()
