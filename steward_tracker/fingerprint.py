"""Content fingerprints for cheap change detection."""

from __future__ import annotations

import hashlib


def fingerprint(content: str) -> str:
    """Return the MD5 hex digest of the content. Not used for anything security related."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()
