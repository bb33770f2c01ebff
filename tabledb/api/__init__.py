"""API module - Flask HTTP façade"""

from .app import create_app

__all__ = ['create_app']
