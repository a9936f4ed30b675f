"""Shared fixtures for steward tracker tests."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from steward_tracker.fetcher import FetchError
from steward_tracker.models import TrackedSource
from steward_tracker.pipeline import PipelineOrchestrator, Variant
from steward_tracker.storage import SnapshotStore
from steward_tracker.summarizer import Summarizer
from steward_tracker.update_log import UpdateLog


class FakeFetcher:
    """Serves canned documents; a FetchError value is raised instead of returned."""

    def __init__(self, pages: Optional[dict] = None):
        self.pages = dict(pages or {})
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        self.calls.append(url)
        page = self.pages[url]
        if isinstance(page, FetchError):
            raise page
        return page

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def platform_sources() -> tuple[TrackedSource, ...]:
    return (
        TrackedSource(
            name="Acme AI",
            urls=(
                "https://acme.example/privacy",
                "https://acme.example/terms",
                "https://acme.example/usage-policy",
            ),
        ),
    )


@pytest.fixture
def policy_sources() -> tuple[TrackedSource, ...]:
    return (
        TrackedSource(name="Test Agency", urls=("https://agency.example.gov.au/news",)),
    )


@pytest.fixture
def make_orchestrator(tmp_path: Path):
    """Build an orchestrator over tmp_path with a degraded summarizer unless one is given."""

    def _make(
        variant: Variant,
        fetcher: FakeFetcher,
        summarizer: Optional[Summarizer] = None,
    ) -> PipelineOrchestrator:
        return PipelineOrchestrator(
            variant=variant,
            fetcher=fetcher,
            snapshots=SnapshotStore(tmp_path / "snapshots", variant.category),
            summarizer=summarizer or Summarizer(None, kind=variant.kind),
            update_log=UpdateLog(variant.log_path, variant.kind, variant.capacity),
        )

    return _make


@pytest.fixture
def platform_variant(tmp_path: Path, platform_sources) -> Variant:
    return Variant(
        kind="platform_update",
        category="platforms",
        sources=platform_sources,
        log_path=tmp_path / "data" / "updates.json",
        capacity=50,
    )


@pytest.fixture
def policy_variant(tmp_path: Path, policy_sources) -> Variant:
    return Variant(
        kind="policy_update",
        category="policies",
        sources=policy_sources,
        log_path=tmp_path / "data" / "policy-updates.json",
        capacity=30,
        relevance_gated=True,
    )
