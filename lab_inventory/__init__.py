"""Lab equipment inventory dashboard backed by a spreadsheet web app."""
from .app import create_app
from .config import APP_VERSION

__version__ = APP_VERSION

__all__ = ['create_app', '__version__']
