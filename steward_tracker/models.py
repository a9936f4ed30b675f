"""Pydantic data models for the steward tracker."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

UpdateKind = Literal["platform_update", "policy_update"]
OutcomeStatus = Literal["unchanged", "record_written", "snapshot_only", "failed"]

# Dashboard JSON uses a different name key and type label per kind
_NAME_KEYS: dict[str, str] = {"platform_update": "platform", "policy_update": "source"}
_TYPE_LABELS: dict[str, str] = {"platform_update": "updated", "policy_update": "policy_update"}


class TrackedSource(BaseModel):
    """A named publisher and the document URLs tracked for it."""

    model_config = ConfigDict(frozen=True)

    name: str
    urls: tuple[str, ...]


class Snapshot(BaseModel):
    """Last committed content and fingerprint for a tracked URL."""

    fingerprint: str
    raw_content: str
    stored_at: Optional[datetime] = None


class ChangeRecord(BaseModel):
    """A user-facing description of a detected change."""

    model_config = ConfigDict(frozen=True)

    id: int
    source_name: str
    url: str
    kind: UpdateKind
    title: str
    summary: str
    timestamp: str  # ISO-8601
    action_required: bool

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize to the shape the dashboard reads."""
        return {
            "id": self.id,
            _NAME_KEYS[self.kind]: self.source_name,
            "url": self.url,
            "type": _TYPE_LABELS[self.kind],
            "title": self.title,
            "summary": self.summary,
            "timestamp": self.timestamp,
            "action_required": self.action_required,
        }

    @classmethod
    def from_json_dict(cls, data: dict[str, Any], kind: UpdateKind) -> ChangeRecord:
        """Parse a dashboard-shaped entry. Raises pydantic.ValidationError on bad input."""
        return cls(
            id=data.get("id"),
            source_name=data.get(_NAME_KEYS[kind]),
            url=data.get("url"),
            kind=kind,
            title=data.get("title"),
            summary=data.get("summary"),
            timestamp=data.get("timestamp"),
            action_required=data.get("action_required", False),
        )


class UrlOutcome(BaseModel):
    """Terminal state reached for one URL in a run."""

    source_name: str
    url: str
    status: OutcomeStatus
    error: Optional[str] = None
    record_id: Optional[int] = None


class RunReport(BaseModel):
    """Per-URL outcomes collected over one pipeline run."""

    kind: UpdateKind
    started_at: datetime
    finished_at: Optional[datetime] = None
    outcomes: list[UrlOutcome] = Field(default_factory=list)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def failures(self) -> list[UrlOutcome]:
        return [o for o in self.outcomes if o.status == "failed"]

    @property
    def records_written(self) -> int:
        return self.count("record_written")
