"""
Data Types Module - Defines supported column data types for TableDB

Supports: integer, real, char, string, boolean
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any
import math
import re

from .errors import InvalidTypeError, TypeMismatchError


class DomainType(Enum):
    """Supported column types. Values are the external type tokens."""
    INTEGER = 'integer'
    REAL = 'real'
    CHAR = 'char'
    STRING = 'string'
    BOOLEAN = 'boolean'


@dataclass(frozen=True)
class Cell:
    """A single typed cell value"""
    dtype: DomainType
    value: Any

    def __str__(self) -> str:
        if self.dtype == DomainType.BOOLEAN:
            return 'true' if self.value else 'false'
        return str(self.value)


_INTEGER_RE = re.compile(r'[+-]?[0-9]+')
_REAL_RE = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')

_DEFAULTS = {
    DomainType.INTEGER: 0,
    DomainType.REAL: 0.0,
    DomainType.CHAR: ' ',
    DomainType.STRING: '',
    DomainType.BOOLEAN: False,
}


class TypeParser:
    """Parses type tokens and converts raw values into typed cells"""

    @staticmethod
    def parse_type(token: str) -> DomainType:
        """Parse a type token (case-sensitive) into a DomainType"""
        try:
            return DomainType(token)
        except ValueError:
            raise InvalidTypeError(f"Unknown data type: {token}") from None

    @staticmethod
    def conforms(value: Any, dtype: DomainType) -> bool:
        """Check that a raw value can be stored as dtype without loss"""
        if dtype == DomainType.INTEGER:
            if isinstance(value, bool):
                return False
            if isinstance(value, int):
                return True
            if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
                # int() refuses very long digit strings (sys.int_info)
                try:
                    int(value)
                except ValueError:
                    return False
                return True
            return False

        elif dtype == DomainType.REAL:
            if isinstance(value, bool):
                return False
            if isinstance(value, int):
                try:
                    return int(float(value)) == value
                except OverflowError:
                    return False
            if isinstance(value, float):
                return math.isfinite(value)
            if isinstance(value, str) and _REAL_RE.fullmatch(value):
                return math.isfinite(float(value))
            return False

        elif dtype == DomainType.CHAR:
            return isinstance(value, str) and len(value) == 1

        elif dtype == DomainType.STRING:
            return isinstance(value, str)

        elif dtype == DomainType.BOOLEAN:
            if isinstance(value, bool):
                return True
            return isinstance(value, str) and value.lower() in ('true', 'false')

        return False

    @staticmethod
    def convert(value: Any, dtype: DomainType) -> Cell:
        """Convert a raw value into a Cell of dtype"""
        if not TypeParser.conforms(value, dtype):
            raise TypeMismatchError(f"Value {value!r} is not a valid {dtype.value}")

        if dtype == DomainType.INTEGER:
            return Cell(dtype, int(value))
        elif dtype == DomainType.REAL:
            return Cell(dtype, float(value))
        elif dtype == DomainType.BOOLEAN:
            if isinstance(value, str):
                return Cell(dtype, value.lower() == 'true')
            return Cell(dtype, value)

        return Cell(dtype, value)

    @staticmethod
    def default_cell(dtype: DomainType) -> Cell:
        """Placeholder cell for new rows and columns"""
        return Cell(dtype, _DEFAULTS[dtype])
