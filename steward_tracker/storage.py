"""Flat file storage for per-URL content snapshots."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from .fingerprint import fingerprint
from .models import Snapshot

logger = logging.getLogger(__name__)

_UNSAFE_NAME = re.compile(r"[^A-Za-z0-9]")
_UNSAFE_TAIL = re.compile(r"[^A-Za-z0-9._-]")


def snapshot_key(source_name: str, url: str) -> str:
    """
    Build the filesystem-safe key for a (source, url) pair.

    The key is the sanitized source name plus the last non-empty path
    segment of the URL ("index" for a bare host). Two URLs of one source
    that end in the same segment map to the same key.
    """
    segments = [s for s in urlparse(url).path.split("/") if s]
    tail = segments[-1] if segments else "index"
    return f"{_UNSAFE_NAME.sub('-', source_name)}-{_UNSAFE_TAIL.sub('-', tail)}"


class SnapshotStore:
    """Keeps the latest raw content and fingerprint for each tracked URL."""

    def __init__(self, snapshots_dir: Path | str, category: str):
        self.root = Path(snapshots_dir) / category
        self.root.mkdir(parents=True, exist_ok=True)

    def _content_path(self, key: str) -> Path:
        return self.root / f"{key}.txt"

    def _digest_path(self, key: str) -> Path:
        return self.root / f"{key}.hash"

    def prior_content(self, key: str) -> Optional[str]:
        """Last committed raw content, or None on first observation."""
        path = self._content_path(key)
        if not path.exists():
            return None
        # newline="" keeps CRLF content byte-identical to what was committed
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()

    def prior_digest(self, key: str) -> Optional[str]:
        """Last committed fingerprint, or None on first observation."""
        path = self._digest_path(key)
        if path.exists():
            digest = path.read_text(encoding="utf-8").strip()
            if digest:
                return digest

        # Content is canonical: recover from a commit interrupted before the digest write
        content = self.prior_content(key)
        if content is None:
            return None
        logger.warning("Digest missing for snapshot %s, deriving it from stored content", key)
        return fingerprint(content)

    def load(self, key: str) -> Optional[Snapshot]:
        """Load the full snapshot for a key, or None if it was never committed."""
        content = self.prior_content(key)
        if content is None:
            return None
        stored_at = datetime.fromtimestamp(self._content_path(key).stat().st_mtime, tz=timezone.utc)
        return Snapshot(
            fingerprint=self.prior_digest(key) or fingerprint(content),
            raw_content=content,
            stored_at=stored_at,
        )

    def has_changed(self, key: str, digest: str) -> bool:
        """True if the digest differs from the committed one (or nothing was committed)."""
        return self.prior_digest(key) != digest

    def commit(self, key: str, content: str, digest: str) -> None:
        """Overwrite the snapshot. Content is written before the digest."""
        with open(self._content_path(key), "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self._digest_path(key).write_text(digest, encoding="utf-8")
