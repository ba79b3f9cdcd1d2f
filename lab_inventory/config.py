import logging
import secrets
import sys

APP_NAME = "Lab Inventory"
APP_VERSION = "1.0.0"

# Shell files pre-cached by the service worker
SHELL_ASSETS = ['/', '/manifest.json', '/sw.js']

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DefaultConfig:
    # Apps Script web-app URL of the spreadsheet backend. Set through
    # LAB_INVENTORY_SCRIPT_URL or create_app(overrides).
    SCRIPT_URL = ""
    GATEWAY_TIMEOUT = 30
    CACHE_NAME = "lab-inventory-cache-v1"
    SHELL_ASSETS = SHELL_ASSETS
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    SECRET_KEY = secrets.token_hex(32)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    HOST = '127.0.0.1'
    PORT = 5050
    LOG_LEVEL = 'INFO'


def configure_logging(level='INFO'):
    """Attach one stream handler to the package logger; repeat calls only adjust the level."""
    logger = logging.getLogger('lab_inventory')
    if not any(getattr(h, '_lab_inventory', False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._lab_inventory = True
        logger.addHandler(handler)
    logger.setLevel(str(level).upper())
    return logger
