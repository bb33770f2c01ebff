"""
TableDB - In-memory typed tables with a JSON HTTP API
"""

__version__ = "1.0.0"

from .core.store import TableStore
from .core.repl import REPL
from .core.errors import StoreError

__all__ = ["TableStore", "REPL", "StoreError"]
