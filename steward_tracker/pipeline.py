"""Change detection pipeline over tracked sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import Config
from .fetcher import ContentFetcher, FetchError
from .fingerprint import fingerprint
from .models import ChangeRecord, RunReport, TrackedSource, UpdateKind, UrlOutcome
from .relevance import RelevanceFilter
from .storage import SnapshotStore, snapshot_key
from .summarizer import Summarizer
from .update_log import UpdateLog, build_change_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Variant:
    """Everything that differs between the platform and policy pipelines."""

    kind: UpdateKind
    category: str  # snapshot subdirectory
    sources: tuple[TrackedSource, ...]
    log_path: Path
    capacity: int
    relevance_gated: bool = False

    @classmethod
    def platforms(cls, config: Config) -> Variant:
        return cls(
            kind="platform_update",
            category="platforms",
            sources=config.platform_sources,
            log_path=config.data_dir / "updates.json",
            capacity=config.platform_log_capacity,
        )

    @classmethod
    def policies(cls, config: Config) -> Variant:
        return cls(
            kind="policy_update",
            category="policies",
            sources=config.policy_sources,
            log_path=config.data_dir / "policy-updates.json",
            capacity=config.policy_log_capacity,
            relevance_gated=True,
        )


class PipelineOrchestrator:
    """Runs fetch, compare, summarize and record for every tracked URL, in order."""

    def __init__(
        self,
        variant: Variant,
        fetcher: ContentFetcher,
        snapshots: SnapshotStore,
        summarizer: Summarizer,
        update_log: UpdateLog,
        relevance_filter: Optional[RelevanceFilter] = None,
    ):
        self.variant = variant
        self.fetcher = fetcher
        self.snapshots = snapshots
        self.summarizer = summarizer
        self.update_log = update_log
        if relevance_filter is None and variant.relevance_gated:
            relevance_filter = RelevanceFilter()
        self.relevance_filter = relevance_filter

    @classmethod
    def from_config(cls, config: Config, variant: Variant) -> PipelineOrchestrator:
        """Wire up the default collaborators for a variant."""
        return cls(
            variant=variant,
            fetcher=ContentFetcher(timeout=config.fetch_timeout),
            snapshots=SnapshotStore(config.snapshots_dir, variant.category),
            summarizer=Summarizer(
                config.gemini_api_key,
                kind=variant.kind,
                model=config.generation_model,
                base_url=config.generation_base_url,
            ),
            update_log=UpdateLog(variant.log_path, variant.kind, variant.capacity),
        )

    async def aclose(self) -> None:
        """Release the fetcher session and the summarizer client."""
        self.fetcher.close()
        await self.summarizer.aclose()

    async def run(self) -> RunReport:
        """Process every URL of every source. Never aborts on a single URL's failure."""
        report = RunReport(kind=self.variant.kind, started_at=datetime.now(timezone.utc))

        for source in self.variant.sources:
            logger.info("Checking %s...", source.name)
            for url in source.urls:
                try:
                    outcome = await self.process_url(source, url)
                except FetchError as e:
                    logger.error("Error fetching %s - %s: %s", source.name, url, e)
                    outcome = UrlOutcome(source_name=source.name, url=url, status="failed", error=str(e))
                except Exception as e:
                    logger.exception("Error checking %s - %s", source.name, url)
                    outcome = UrlOutcome(source_name=source.name, url=url, status="failed", error=str(e))
                report.outcomes.append(outcome)

        report.finished_at = datetime.now(timezone.utc)
        return report

    async def process_url(self, source: TrackedSource, url: str) -> UrlOutcome:
        """
        Run one URL through the pipeline.

        Returns:
            The terminal outcome (unchanged, record_written or snapshot_only,
            or failed when the update log could not be written)

        Raises:
            FetchError: If the document could not be fetched
        """
        logger.debug("Fetching %s", url)
        content = self.fetcher.fetch(url)
        digest = fingerprint(content)
        key = snapshot_key(source.name, url)

        if not self.snapshots.has_changed(key, digest):
            logger.info("No changes for %s - %s", source.name, url)
            return UrlOutcome(source_name=source.name, url=url, status="unchanged")

        logger.info("Change detected for %s - %s", source.name, url)
        previous_content = self.snapshots.prior_content(key)
        summary = await self.summarizer.summarize(content, previous_content, context=source.name)

        record: Optional[ChangeRecord] = None
        if self.relevance_filter is None or self.relevance_filter.passes(content, summary):
            record = build_change_record(
                self.variant.kind,
                source.name,
                url,
                summary,
                record_id=self.update_log.next_id(),
            )
            if not self.update_log.append(record):
                # No commit: a later run detects and reports the change again
                return UrlOutcome(
                    source_name=source.name,
                    url=url,
                    status="failed",
                    error=f"update log write failed: {self.update_log.path}",
                )
        else:
            logger.info("Change detected but no AI-related content found for %s - %s", source.name, url)

        # Committed whether or not the change passed the relevance gate
        self.snapshots.commit(key, content, digest)

        if record is None:
            return UrlOutcome(source_name=source.name, url=url, status="snapshot_only")
        return UrlOutcome(source_name=source.name, url=url, status="record_written", record_id=record.id)
