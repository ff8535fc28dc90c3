"""
Settings and configuration for furiawase.

Values come from environment variables, falling back to defaults.
"""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = "") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _env_int(name: str) -> Optional[int]:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, value)
        return None


# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Reading database - defaults to data/furiawase.db
DEFAULT_DB_PATH = DATA_DIR / "furiawase.db"
DB_PATH = Path(os.environ.get("FURIAWASE_DB_PATH", DEFAULT_DB_PATH))

# KANJIDIC2 source (user must download it)
KANJIDIC_PATH = Path(os.environ.get("KANJIDIC_PATH", DATA_DIR / "kanjidic2.xml"))
KANJIDIC_URL = "http://www.edrdg.org/kanjidic/kanjidic2.xml.gz"

# Debug mode
DEBUG = _env_flag("FURIAWASE_DEBUG")

# Cap on candidate attempts per resolution; None means unbounded
MAX_ATTEMPTS = _env_int("FURIAWASE_MAX_ATTEMPTS")

# Add sound-change variants to dictionary readings
VOICING = _env_flag("FURIAWASE_VOICING")
GEMINATION = _env_flag("FURIAWASE_GEMINATION")
