"""HTTP interface for the analytics engines."""

from .app import create_app
from .config import ServiceConfig

__all__ = ['create_app', 'ServiceConfig']
