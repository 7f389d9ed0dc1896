"""
Runtime settings, read from the environment.
"""

import logging
import os

# --- CONFIGURATION ---
DB_PATH = os.environ.get("NOTES_DB_PATH", "notes.db")
LOG_LEVEL = os.environ.get("NOTES_LOG_LEVEL", "INFO").upper()

# The API is the local presentation seam, so it only listens on loopback.
API_HOST = os.environ.get("NOTES_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("NOTES_API_PORT", "8000"))

_seed = os.environ.get("NOTES_RANDOM_SEED")
RANDOM_SEED = int(_seed) if _seed else None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    """
    Installs the root handler. Safe to call more than once.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
