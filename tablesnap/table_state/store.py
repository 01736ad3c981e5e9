"""
Table State Store Module.

This module provides TableStore, the single owner of the table being
reviewed. Every edit goes through its API, and after each change all
subscribers receive a complete snapshot of the new table, never a diff.

Usage:
    from tablesnap.table_state import TableStore, TableData

    store = TableStore(TableData.from_dict(payload))
    store.subscribe(lambda table: print(table.row_count))
    store.update_cell(0, "Qty", "12")

Author: TableSnap Team
"""

from typing import Callable, List, Optional

from tablesnap.utils.logger import get_logger
from .table_data import TableData

# Initialize module logger
logger = get_logger(__name__)

Listener = Callable[[TableData], None]


class TableStore:
    """
    Edit API over a TableData instance.

    Mutations are applied in place and are atomic from the point of view
    of listeners: a listener is only ever called once a mutation has fully
    completed, with a deep copy of the resulting table.

    Attributes:
        listeners: Callables notified with a snapshot after each mutation.

    Example:
        >>> store = TableStore(TableData(headers=["Item"], rows=[["Pen"]]))
        >>> store.rename_header("Item", "Product")
        True
        >>> store.snapshot().headers
        ['Product']
    """

    def __init__(
        self,
        table: Optional[TableData] = None,
        on_change: Optional[Listener] = None
    ) -> None:
        """
        Initialize the store.

        Args:
            table: Initial table. The store keeps its own copy.
            on_change: Optional first listener.
        """
        self._table = table.copy() if table is not None else TableData()
        self.listeners: List[Listener] = []

        if on_change is not None:
            self.listeners.append(on_change)

        logger.debug(
            f"TableStore initialized ({self._table.row_count} rows, "
            f"{self._table.column_count} columns)"
        )

    @property
    def headers(self) -> List[str]:
        return list(self._table.headers)

    @property
    def row_count(self) -> int:
        return self._table.row_count

    @property
    def column_count(self) -> int:
        return self._table.column_count

    def cell(self, row_index: int, header: str) -> str:
        return self._table.cell(row_index, header)

    def snapshot(self) -> TableData:
        """Return a deep copy of the current table."""
        return self._table.copy()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A callable that removes the listener again.
        """
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self.listeners):
            listener(self.snapshot())

    def rename_header(self, old: str, new: str) -> bool:
        """
        Rename a column, re-keying every row.

        The new name is trimmed. Renaming to the same name is a no-op.
        An empty name, or a name already used by another column, is
        rejected and leaves the table unchanged.

        Args:
            old: Current header name.
            new: Requested header name.

        Returns:
            True if the header was renamed.

        Raises:
            KeyError: If ``old`` is not a current header.
        """
        position = self._table.column_index(old)
        new = (new or "").strip()

        if new == old:
            return False

        if not new:
            logger.debug(f"Ignoring empty name for column '{old}'")
            return False

        if new in self._table.headers:
            logger.warning(
                f"Rejected rename of column '{old}' to '{new}': name already in use"
            )
            return False

        # Cells are positional, so renaming the header re-keys every row.
        self._table.headers[position] = new
        logger.debug(f"Renamed column '{old}' -> '{new}'")
        self._notify()
        return True

    def update_cell(self, row_index: int, header: str, value: str) -> None:
        """
        Replace the value of a single cell.

        Raises:
            IndexError: If ``row_index`` is out of range.
            KeyError: If ``header`` is not a current header.
        """
        if not 0 <= row_index < self._table.row_count:
            raise IndexError(f"Row index out of range: {row_index}")

        position = self._table.column_index(header)
        value = value if value is not None else ""

        if self._table.rows[row_index][position] == value:
            return

        self._table.rows[row_index][position] = value
        self._notify()

    def add_row(self) -> int:
        """
        Append an all-empty row.

        Returns:
            Index of the new row.
        """
        self._table.rows.append([""] * self._table.column_count)
        logger.debug(f"Added row {self._table.row_count - 1}")
        self._notify()
        return self._table.row_count - 1

    def delete_row(self, row_index: int) -> None:
        """
        Remove a row; later rows shift down by one.

        Raises:
            IndexError: If ``row_index`` is out of range.
        """
        if not 0 <= row_index < self._table.row_count:
            raise IndexError(f"Row index out of range: {row_index}")

        del self._table.rows[row_index]
        logger.debug(f"Deleted row {row_index}")
        self._notify()
