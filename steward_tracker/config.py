"""Configuration management for the steward tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import dotenv

from .models import TrackedSource

dotenv.load_dotenv()


PLATFORM_SOURCES: tuple[TrackedSource, ...] = (
    TrackedSource(name="Claude", urls=("https://www.anthropic.com/privacy", "https://www.anthropic.com/terms")),
    TrackedSource(name="ChatGPT", urls=("https://openai.com/privacy/", "https://openai.com/terms/")),
    TrackedSource(name="Gemini", urls=("https://policies.google.com/privacy", "https://policies.google.com/terms")),
    TrackedSource(name="Perplexity", urls=("https://www.perplexity.ai/privacy", "https://www.perplexity.ai/terms")),
    TrackedSource(
        name="Midjourney",
        urls=(
            "https://docs.midjourney.com/docs/privacy-policy",
            "https://docs.midjourney.com/docs/terms-of-service",
        ),
    ),
    TrackedSource(
        name="Copilot",
        urls=("https://privacy.microsoft.com/privacystatement", "https://www.microsoft.com/servicesagreement"),
    ),
    TrackedSource(name="ElevenLabs", urls=("https://elevenlabs.io/privacy", "https://elevenlabs.io/terms")),
)

POLICY_SOURCES: tuple[TrackedSource, ...] = (
    TrackedSource(
        name="Digital Transformation Agency",
        urls=(
            "https://www.dta.gov.au/our-projects/artificial-intelligence",
            "https://www.dta.gov.au/help-and-advice/digital-service-standard",
        ),
    ),
    TrackedSource(
        name="Department of Industry Science and Resources",
        urls=(
            "https://www.industry.gov.au/science-technology-and-innovation/artificial-intelligence",
            "https://www.industry.gov.au/news",
        ),
    ),
    TrackedSource(
        name="PM&C - Department of Prime Minister and Cabinet",
        urls=("https://www.pmc.gov.au/news", "https://www.pmc.gov.au/public-data/artificial-intelligence"),
    ),
    TrackedSource(
        name="Office of the Australian Information Commissioner",
        urls=(
            "https://www.oaic.gov.au/privacy/guidance-and-advice",
            "https://www.oaic.gov.au/updates/news-and-media",
        ),
    ),
    TrackedSource(
        name="Australian Communications and Media Authority",
        urls=("https://www.acma.gov.au/publications", "https://www.acma.gov.au/artificial-intelligence-regulation"),
    ),
    TrackedSource(
        name="Australian Public Service Commission",
        urls=(
            "https://www.apsc.gov.au/working-aps/diversity-inclusion/digital-profession",
            "https://www.apsc.gov.au/publications-and-reports",
        ),
    ),
    TrackedSource(
        name="Treasury",
        urls=("https://treasury.gov.au/consultation", "https://treasury.gov.au/publication"),
    ),
    TrackedSource(
        name="Department of Home Affairs",
        urls=(
            "https://www.homeaffairs.gov.au/reports-and-publications",
            "https://www.homeaffairs.gov.au/news-subsite/news",
        ),
    ),
)

# Gemini's OpenAI-compatible endpoint
DEFAULT_GENERATION_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_GENERATION_MODEL = "gemini-2.0-flash"


@dataclass(frozen=True)
class Config:
    """Configuration loaded from environment variables."""

    # Text generation service
    gemini_api_key: Optional[str] = None
    generation_base_url: str = DEFAULT_GENERATION_BASE_URL
    generation_model: str = DEFAULT_GENERATION_MODEL

    # Working directory holding data/ and snapshots/
    work_dir: Path = field(default_factory=lambda: Path("."))

    # Fetching
    fetch_timeout: float = 30.0  # seconds

    # Log bounds
    platform_log_capacity: int = 50
    policy_log_capacity: int = 30  # policy updates are less frequent

    # Sources to track
    platform_sources: tuple[TrackedSource, ...] = PLATFORM_SOURCES
    policy_sources: tuple[TrackedSource, ...] = POLICY_SOURCES

    @property
    def data_dir(self) -> Path:
        return self.work_dir / "data"

    @property
    def snapshots_dir(self) -> Path:
        return self.work_dir / "snapshots"

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            generation_base_url=os.getenv("GENERATION_BASE_URL", DEFAULT_GENERATION_BASE_URL),
            generation_model=os.getenv("GENERATION_MODEL", DEFAULT_GENERATION_MODEL),
            work_dir=Path(os.getenv("WORK_DIR", ".")),
            fetch_timeout=float(os.getenv("FETCH_TIMEOUT", "30")),
        )

    def validate(self) -> list[str]:
        """Check the configuration. Returns a list of warnings; none of them are fatal."""
        warnings = []

        if not self.gemini_api_key:
            warnings.append("GEMINI_API_KEY not set - summaries will use fallback text")
        if self.fetch_timeout <= 0:
            warnings.append(f"FETCH_TIMEOUT must be positive, got {self.fetch_timeout}")
        if not self.platform_sources and not self.policy_sources:
            warnings.append("No tracked sources configured")

        return warnings
