"""
Schema Module - Defines databases, tables, columns and rows

Supports:
- Typed columns in declaration order
- Rows of typed cells aligned to columns by position
- Detached copies for projections and read snapshots

These structures hold no lock of their own; they are mutated only
through TableStore, which keeps the arity invariant
(len(row.values) == len(table.columns)) after every call.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import IndexOutOfRangeError, NotFoundError
from .types import Cell, DomainType


@dataclass
class Column:
    """Represents a column in a table"""
    name: str
    dtype: DomainType

    def to_dict(self) -> dict:
        return {'name': self.name, 'type': self.dtype.value}


@dataclass
class Row:
    """Represents a row: one cell per column, by position"""
    values: List[Cell] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {'values': [cell.value for cell in self.values]}


@dataclass
class Table:
    """Represents a table with its columns and rows"""
    name: str
    columns: List[Column] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    def column_names(self) -> List[str]:
        """Get list of column names"""
        return [col.name for col in self.columns]

    def find_column(self, name: str) -> Optional[Column]:
        """Get column by name (exact match)"""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def column_index(self, name: str) -> int:
        """Get column index by name"""
        for idx, col in enumerate(self.columns):
            if col.name == name:
                return idx
        raise NotFoundError(f"There is no column named {name} in the table {self.name}")

    def check_column_index(self, index: int) -> Column:
        if not 0 <= index < len(self.columns):
            raise IndexOutOfRangeError(
                f"Column index {index} is out of range for the table {self.name}"
            )
        return self.columns[index]

    def check_row_index(self, index: int) -> Row:
        if not 0 <= index < len(self.rows):
            raise IndexOutOfRangeError(
                f"There is no row in the table named {self.name} at index {index}"
            )
        return self.rows[index]

    def copy(self) -> 'Table':
        """Detached copy; cells are immutable and can be shared"""
        return Table(
            name=self.name,
            columns=[Column(col.name, col.dtype) for col in self.columns],
            rows=[Row(list(row.values)) for row in self.rows],
        )

    def to_dict(self) -> dict:
        """Serialize table to dictionary"""
        return {
            'name': self.name,
            'columns': [col.to_dict() for col in self.columns],
            'rows': [row.to_dict() for row in self.rows],
        }


@dataclass
class Database:
    """Named container of tables, kept in creation order"""
    name: str
    tables: List[Table] = field(default_factory=list)

    def find_table(self, name: str) -> Optional[Table]:
        """Get table by name (exact match)"""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def table_names(self) -> List[str]:
        """List all table names"""
        return [table.name for table in self.tables]

    def copy(self) -> 'Database':
        return Database(self.name, [table.copy() for table in self.tables])

    def to_dict(self) -> dict:
        """Serialize database to dictionary"""
        return {
            'name': self.name,
            'tables': [table.to_dict() for table in self.tables],
        }
