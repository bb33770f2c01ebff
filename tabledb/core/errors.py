"""
Errors Module - Error kinds raised by the table store

Each error carries a stable ``kind`` and the HTTP status class a caller
should answer with, so callers never need to inspect the message text.
"""


class StoreError(Exception):
    """Base class for every failure reported by the store"""
    kind = 'StoreError'
    status = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def to_dict(self) -> dict:
        return {'error': self.message, 'kind': self.kind}


class NotInitializedError(StoreError):
    """No database has been created yet"""
    kind = 'NotInitialized'


class AlreadyExistsError(StoreError):
    """A database, table or column with that name already exists"""
    kind = 'AlreadyExists'


class DuplicateNameError(AlreadyExistsError):
    """A table or column name collides with another one in the same scope"""
    kind = 'DuplicateName'


class NotFoundError(StoreError):
    """A table or column name does not resolve"""
    kind = 'NotFound'
    status = 404


class IndexOutOfRangeError(StoreError):
    """A column or row index is outside the current valid range"""
    kind = 'IndexOutOfRange'
    status = 404


class InvalidTypeError(StoreError):
    """A type token does not name a known domain type"""
    kind = 'InvalidType'


class TypeMismatchError(StoreError):
    """A value does not conform to its column's type"""
    kind = 'TypeMismatch'


class CardinalityMismatchError(StoreError):
    """A number of supplied values does not fit the table's columns"""
    kind = 'CardinalityMismatch'
