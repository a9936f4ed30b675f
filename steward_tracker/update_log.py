"""Bounded newest-first JSON log of change records."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .models import ChangeRecord, UpdateKind

logger = logging.getLogger(__name__)

# Summary terms that flag a record as needing action
ACTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "platform_update": ("data", "privacy", "government", "australia"),
    "policy_update": ("mandatory", "requirement", "must", "compliance", "deadline"),
}


def requires_action(kind: UpdateKind, summary: str) -> bool:
    lowered = summary.lower()
    return any(keyword in lowered for keyword in ACTION_KEYWORDS[kind])


def record_title(kind: UpdateKind, source_name: str, url: str) -> str:
    if kind == "policy_update":
        return f"{source_name} - AI Policy Update"
    document = "Privacy Policy" if "privacy" in url else "Terms of Service"
    return f"{source_name} {document} Update"


def build_change_record(
    kind: UpdateKind,
    source_name: str,
    url: str,
    summary: str,
    record_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> ChangeRecord:
    """Create a record, computing its title and action flag once."""
    now = now or datetime.now(timezone.utc)
    return ChangeRecord(
        id=record_id if record_id is not None else int(now.timestamp() * 1000),
        source_name=source_name,
        url=url,
        kind=kind,
        title=record_title(kind, source_name, url),
        summary=summary,
        timestamp=now.isoformat().replace("+00:00", "Z"),
        action_required=requires_action(kind, summary),
    )


class UpdateLog:
    """Persists change records newest-first, keeping at most `capacity` of them."""

    def __init__(self, path: Path | str, kind: UpdateKind, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.path = Path(path)
        self.kind = kind
        self.capacity = capacity

    def load(self) -> list[ChangeRecord]:
        """Load the log. A missing or unreadable file yields an empty log."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON list, got {type(data).__name__}")
            records = []
            for entry in data:
                if not isinstance(entry, dict):
                    raise ValueError(f"expected a JSON object entry, got {type(entry).__name__}")
                records.append(ChangeRecord.from_json_dict(entry, self.kind))
            return records
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Error reading update log %s, starting from empty: %s", self.path, e)
            return []

    def next_id(self) -> int:
        """Time-derived id, strictly greater than the id at the head of the log."""
        candidate = int(time.time() * 1000)
        records = self.load()
        if records:
            candidate = max(candidate, records[0].id + 1)
        return candidate

    def append(self, record: ChangeRecord) -> bool:
        """
        Insert a record at the head and rewrite the log, dropping the oldest
        entries beyond capacity.

        Returns:
            True if the log was written, False if the write failed and the
            previous file was left in place
        """
        records = [record] + self.load()
        return self._write(records[: self.capacity])

    def _write(self, records: list[ChangeRecord]) -> bool:
        """Full rewrite through a temp file so a failed write leaves the old file intact."""
        payload = json.dumps([r.to_json_dict() for r in records], indent=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            logger.error("Error writing update log %s: %s", self.path, e)
            tmp_path.unlink(missing_ok=True)
            return False
        return True
