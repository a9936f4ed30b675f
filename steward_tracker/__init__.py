"""
AI Steward Tracker - change tracking for AI platform terms and government AI policy pages.

This package fetches a fixed set of public documents, detects when their content
changes, summarizes the changes with a text generation service, and keeps bounded
JSON logs of the results for a dashboard.
"""

from .config import Config
from .models import (
    TrackedSource,
    Snapshot,
    ChangeRecord,
    UrlOutcome,
    RunReport,
)
from .fetcher import ContentFetcher, FetchError, FetchTimeoutError
from .fingerprint import fingerprint
from .storage import SnapshotStore, snapshot_key
from .relevance import RelevanceFilter
from .summarizer import Summarizer
from .update_log import UpdateLog, build_change_record
from .pipeline import PipelineOrchestrator, Variant

__all__ = [
    "Config",
    "TrackedSource",
    "Snapshot",
    "ChangeRecord",
    "UrlOutcome",
    "RunReport",
    "ContentFetcher",
    "FetchError",
    "FetchTimeoutError",
    "fingerprint",
    "SnapshotStore",
    "snapshot_key",
    "RelevanceFilter",
    "Summarizer",
    "UpdateLog",
    "build_change_record",
    "PipelineOrchestrator",
    "Variant",
]
