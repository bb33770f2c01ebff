"""Core module - TableStore, Schema, Types, Errors, REPL"""

from .errors import (
    StoreError, NotInitializedError, AlreadyExistsError, DuplicateNameError,
    NotFoundError, IndexOutOfRangeError, InvalidTypeError, TypeMismatchError,
    CardinalityMismatchError,
)
from .types import DomainType, Cell, TypeParser
from .schema import Column, Row, Table, Database
from .store import TableStore

__all__ = [
    'TableStore',
    'Column', 'Row', 'Table', 'Database',
    'DomainType', 'Cell', 'TypeParser',
    'StoreError', 'NotInitializedError', 'AlreadyExistsError', 'DuplicateNameError',
    'NotFoundError', 'IndexOutOfRangeError', 'InvalidTypeError', 'TypeMismatchError',
    'CardinalityMismatchError',
]
