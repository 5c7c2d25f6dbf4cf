"""
Configuration settings for resume2folio.

Values come from the environment (optionally a local .env file). The résumé
extractor and the markup cloner need none of this; it only drives the
collaborators around them.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os
from pathlib import Path

from folio.exceptions import InputTooLargeError

# Template storage: one directory per template holding index.hbs + style.css
TEMPLATES_DIR = Path(os.getenv("FOLIO_TEMPLATES_DIR", "templates"))
PORTFOLIOS_DIR = Path(os.getenv("FOLIO_PORTFOLIOS_DIR", os.path.join("public", "portfolios")))

# User-generated (cloned) templates carry this prefix and are never cached
CLONED_PREFIX = "cloned-"
DEFAULT_TEMPLATE = "simple"

# Input policy – résumé text and fetched pages beyond this are rejected
MAX_INPUT_BYTES = int(os.getenv("FOLIO_MAX_INPUT_BYTES", str(500 * 1024)))

# Fetching
FETCH_TIMEOUT = float(os.getenv("FOLIO_FETCH_TIMEOUT", "15"))
CSS_FETCH_TIMEOUT = float(os.getenv("FOLIO_CSS_FETCH_TIMEOUT", "8"))
USER_AGENT = os.getenv(
    "FOLIO_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

LOG_LEVEL = os.getenv("FOLIO_LOG_LEVEL", "INFO").upper()


def check_input_size(payload: str | bytes, limit: int | None = None) -> None:
    """Raise InputTooLargeError when payload is over the configured cap."""
    limit = MAX_INPUT_BYTES if limit is None else limit
    size = len(payload.encode("utf-8") if isinstance(payload, str) else payload)
    if size > limit:
        raise InputTooLargeError(size, limit)
