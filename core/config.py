"""
Runtime configuration for the Dental Center dashboard.

Values come from the environment; a local .env file is loaded first so
`streamlit run app.py` picks up overrides without exporting anything.
"""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Path: project_root/data/dental.db
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_DB_PATH = os.path.join(BASE_DIR, "data", "dental.db")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not a whole number; using %d", name, raw, default)
        return default


DATABASE_URL = os.getenv("DENTAL_DATABASE_URL", f"sqlite:///{DEFAULT_DB_PATH}")
LOG_LEVEL = os.getenv("DENTAL_LOG_LEVEL", "INFO").upper()

# Seed the demo accounts, patient and appointments when the store is empty
SEED_DEFAULTS = _env_bool("DENTAL_SEED_DEFAULTS", True)

# Dashboard list sizes
UPCOMING_LIMIT = _env_int("DENTAL_UPCOMING_LIMIT", 10)
RECENT_LIMIT = _env_int("DENTAL_RECENT_LIMIT", 5)
