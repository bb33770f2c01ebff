"""
TableStore - Main entry point for TableDB

This is the primary interface for interacting with TableDB.
It owns at most one live Database and serializes every call
through a single lock, so each operation is applied fully or
not at all.

Rows and columns have no stable identity: they are addressed by
position, and any index a caller holds becomes invalid after a
structural deletion earlier in the same table.
"""

import logging
from threading import RLock
from typing import Any, List, Optional, Sequence, Tuple

from .errors import (
    AlreadyExistsError, CardinalityMismatchError, DuplicateNameError,
    NotFoundError, NotInitializedError,
)
from .schema import Column, Database, Row, Table
from .types import Cell, TypeParser

logger = logging.getLogger(__name__)


class TableStore:
    """
    Process-wide registry holding zero or one Database.

    Usage:
        store = TableStore()
        store.create_database("shop")
        store.add_table("users")
        store.add_column("users", "age", "integer")
        row = store.add_row("users")
        store.set_cell_value("30", "users", 0, row)
    """

    def __init__(self):
        self._database: Optional[Database] = None
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return self._database is not None

    def _require_database(self) -> Database:
        if self._database is None:
            raise NotInitializedError("Database is not created yet")
        return self._database

    def _require_table(self, table_name: str) -> Table:
        table = self._require_database().find_table(table_name)
        if table is None:
            raise NotFoundError(f"There is no table named {table_name} in the database")
        return table

    def create_database(self, name: str) -> Database:
        """
        Create the database.

        Raises:
            AlreadyExistsError: If a database is already live
        """
        with self._lock:
            if self._database is not None:
                raise AlreadyExistsError("Database is already created")
            self._database = Database(name)
            logger.debug("Created database %s", name)
            return self._database.copy()

    def delete_database(self) -> Database:
        """Discard the database and everything in it. Returns the discarded database."""
        with self._lock:
            database = self._require_database()
            self._database = None
            logger.debug("Deleted database %s", database.name)
            return database

    def rename_database(self, new_name: str) -> Database:
        with self._lock:
            database = self._require_database()
            database.name = new_name
            logger.debug("Renamed database to %s", new_name)
            return database.copy()

    def get_database(self) -> Database:
        with self._lock:
            return self._require_database().copy()

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def list_tables(self) -> List[Table]:
        with self._lock:
            return [table.copy() for table in self._require_database().tables]

    def get_table(self, table_name: str) -> Table:
        with self._lock:
            return self._require_table(table_name).copy()

    def add_table(self, name: str) -> Table:
        """
        Append an empty table.

        Raises:
            NotInitializedError: If no database is live
            DuplicateNameError: If a table with that exact name exists
        """
        with self._lock:
            database = self._require_database()
            if database.find_table(name) is not None:
                raise DuplicateNameError(
                    f"Database {database.name} already contains the table named {name}"
                )
            table = Table(name)
            database.tables.append(table)
            logger.debug("Added table %s", name)
            return table.copy()

    def delete_table(self, table_name: str) -> Table:
        with self._lock:
            table = self._require_table(table_name)
            self._database.tables.remove(table)
            logger.debug("Deleted table %s", table_name)
            return table

    def rename_table(self, table_name: str, new_name: str) -> Table:
        """Rename a table in place. Renaming to its own name is a no-op."""
        with self._lock:
            table = self._require_table(table_name)
            other = self._database.find_table(new_name)
            if other is not None and other is not table:
                raise DuplicateNameError(
                    f"Database {self._database.name} already contains the table named {new_name}"
                )
            table.name = new_name
            logger.debug("Renamed table %s to %s", table_name, new_name)
            return table.copy()

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def list_column_names(self, table_name: str) -> List[str]:
        with self._lock:
            return self._require_table(table_name).column_names()

    def list_columns(self, table_name: str) -> List[Column]:
        with self._lock:
            return [Column(col.name, col.dtype) for col in self._require_table(table_name).columns]

    def get_column(self, table_name: str, column_name: str) -> Column:
        with self._lock:
            table = self._require_table(table_name)
            col = table.columns[table.column_index(column_name)]
            return Column(col.name, col.dtype)

    def column_index(self, table_name: str, column_name: str) -> int:
        with self._lock:
            return self._require_table(table_name).column_index(column_name)

    def add_column(self, table_name: str, column_name: str, type_token: str) -> Column:
        """
        Append a typed column and a default cell to every existing row.

        Raises:
            InvalidTypeError: If type_token is not a known type
            DuplicateNameError: If the table already has that column
        """
        with self._lock:
            table = self._require_table(table_name)
            dtype = TypeParser.parse_type(type_token)
            if table.find_column(column_name) is not None:
                raise DuplicateNameError(
                    f"Table {table_name} already contains the column named {column_name}"
                )
            column = Column(column_name, dtype)
            table.columns.append(column)
            for row in table.rows:
                row.values.append(TypeParser.default_cell(dtype))
            logger.debug("Added column %s (%s) to %s", column_name, dtype.value, table_name)
            return Column(column.name, column.dtype)

    def delete_column(self, table_name: str, column_index: int) -> Column:
        """Remove the column at column_index and its cell from every row."""
        with self._lock:
            table = self._require_table(table_name)
            column = table.check_column_index(column_index)
            del table.columns[column_index]
            for row in table.rows:
                del row.values[column_index]
            logger.debug("Deleted column %s from %s", column.name, table_name)
            return column

    def delete_column_named(self, table_name: str, column_name: str) -> Column:
        with self._lock:
            return self.delete_column(table_name, self.column_index(table_name, column_name))

    def rename_column(self, table_name: str, column_name: str, new_name: str) -> Column:
        """Rename a column in place, keeping its type and position."""
        with self._lock:
            table = self._require_table(table_name)
            column = table.columns[table.column_index(column_name)]
            if new_name != column_name and new_name in table.column_names():
                raise DuplicateNameError(
                    f"Table {table_name} already contains the column named {new_name}"
                )
            column.name = new_name
            logger.debug("Renamed column %s to %s in %s", column_name, new_name, table_name)
            return Column(column.name, column.dtype)

    # ------------------------------------------------------------------
    # Rows and cells
    # ------------------------------------------------------------------

    def list_rows(self, table_name: str) -> List[Row]:
        with self._lock:
            return [Row(list(row.values)) for row in self._require_table(table_name).rows]

    def get_row(self, table_name: str, row_index: int) -> Row:
        with self._lock:
            row = self._require_table(table_name).check_row_index(row_index)
            return Row(list(row.values))

    def add_row(self, table_name: str) -> int:
        """Append a row of default cells. Returns its index."""
        with self._lock:
            table = self._require_table(table_name)
            table.rows.append(Row([TypeParser.default_cell(col.dtype) for col in table.columns]))
            logger.debug("Added row to %s", table_name)
            return len(table.rows) - 1

    def _convert_row(self, table: Table, values: Sequence[Any]) -> List[Cell]:
        if len(values) != len(table.columns):
            raise CardinalityMismatchError(
                "Numbers of the row's values and the table's columns don't match"
            )
        return [TypeParser.convert(value, col.dtype) for value, col in zip(values, table.columns)]

    def insert_row(self, table_name: str, values: Sequence[Any]) -> Tuple[int, Row]:
        """
        Validate every value, then append the row.

        Returns:
            The new row's index and a copy of the stored row

        Raises:
            CardinalityMismatchError: If len(values) != column count
            TypeMismatchError: If any value does not conform; no row is added
        """
        with self._lock:
            table = self._require_table(table_name)
            row = Row(self._convert_row(table, values))
            table.rows.append(row)
            logger.debug("Inserted row into %s", table_name)
            return len(table.rows) - 1, Row(list(row.values))

    def update_row(self, table_name: str, row_index: int, values: Sequence[Any]) -> Row:
        """Replace every cell of a row; nothing changes if any value is rejected."""
        with self._lock:
            table = self._require_table(table_name)
            row = table.check_row_index(row_index)
            row.values = self._convert_row(table, values)
            logger.debug("Updated row %d of %s", row_index, table_name)
            return Row(list(row.values))

    def set_cell_value(self, raw_value: Any, table_name: str,
                       column_index: int, row_index: int) -> Cell:
        """
        Type-check raw_value against the column and store it.

        Raises:
            IndexOutOfRangeError: If either index is invalid
            TypeMismatchError: If the value does not conform; the cell is unchanged
        """
        with self._lock:
            table = self._require_table(table_name)
            column = table.check_column_index(column_index)
            row = table.check_row_index(row_index)
            cell = TypeParser.convert(raw_value, column.dtype)
            row.values[column_index] = cell
            logger.debug("Set %s[%d][%d] = %r", table_name, row_index, column_index, cell.value)
            return cell

    def delete_row(self, table_name: str, row_index: int) -> Row:
        """Remove a row; rows after it shift down by one."""
        with self._lock:
            table = self._require_table(table_name)
            row = table.check_row_index(row_index)
            del table.rows[row_index]
            logger.debug("Deleted row %d of %s", row_index, table_name)
            return row

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project(self, table_name: str, column_indices: Sequence[int]) -> Table:
        """
        Build a detached table holding the selected columns, in the given
        order. Duplicates and reordering are allowed.

        Asking for more columns than the table has is refused up front
        rather than truncated.

        Raises:
            CardinalityMismatchError: If more indices than columns are given
            IndexOutOfRangeError: If any index is invalid
        """
        with self._lock:
            table = self._require_table(table_name)
            if len(column_indices) > len(table.columns):
                raise CardinalityMismatchError(
                    "Number of columns provided is greater than number of columns "
                    f"in the table named {table_name}"
                )
            columns = [table.check_column_index(i) for i in column_indices]
            return Table(
                name=table.name,
                columns=[Column(col.name, col.dtype) for col in columns],
                rows=[Row([row.values[i] for i in column_indices]) for row in table.rows],
            )

    def project_columns(self, table_name: str, column_names: Sequence[str]) -> Table:
        """Same as project(), with columns given by name."""
        with self._lock:
            table = self._require_table(table_name)
            if len(column_names) > len(table.columns):
                raise CardinalityMismatchError(
                    "Number of columns provided is greater than number of columns "
                    f"in the table named {table_name}"
                )
            return self.project(table_name, [table.column_index(name) for name in column_names])
