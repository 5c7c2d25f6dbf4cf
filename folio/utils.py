"""
Utility functions for resume2folio.
"""

import hashlib


def _sha(text: str) -> str:
    """Computes SHA256 hash of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def clone_id(markup: str, source_url: str = "") -> str:
    """Stable 8-hex suffix for a cloned template."""
    return _sha(source_url + "||" + markup)[:8]
