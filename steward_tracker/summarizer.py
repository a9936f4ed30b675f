"""Natural-language change summaries from an external text generation service."""

from __future__ import annotations

import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from .config import DEFAULT_GENERATION_BASE_URL, DEFAULT_GENERATION_MODEL
from .models import UpdateKind

logger = logging.getLogger(__name__)

# Prefix lengths sent to the service
FIRST_OBSERVATION_CHARS = 5000
COMPARISON_CHARS = 3000

PLATFORM_SUMMARY_PROMPT = """
Summarize this policy document for an Australian public servant in a friendly, colleague-like tone.
Focus on key points about data handling, privacy, and terms that might affect government use:

{content}
"""

PLATFORM_COMPARISON_PROMPT = """
Compare these two policy documents and summarize any significant changes in a friendly, colleague-like tone.
Focus on what an Australian public servant should know. Keep it concise and highlight any changes related
to data handling, privacy, or terms that might affect government use:

PREVIOUS VERSION:
{previous}

NEW VERSION:
{content}
"""

POLICY_SUMMARY_PROMPT = """
Analyze this Australian government policy document from {context} and summarize any AI-related content
in a friendly, colleague-like tone. Focus on guidelines, regulations, or requirements that Australian
public servants should know about. If there's no AI-related content, say so clearly:

{content}
"""

POLICY_COMPARISON_PROMPT = """
Compare these two Australian government policy documents from {context} and summarize any significant
changes in a friendly, colleague-like tone. Focus specifically on AI-related policy changes, new guidelines,
regulations, or requirements that Australian public servants should know about. If there are no AI-related
changes, say so clearly:

PREVIOUS VERSION:
{previous}

NEW VERSION:
{content}
"""

PROMPTS: dict[str, tuple[str, str]] = {
    "platform_update": (PLATFORM_SUMMARY_PROMPT, PLATFORM_COMPARISON_PROMPT),
    "policy_update": (POLICY_SUMMARY_PROMPT, POLICY_COMPARISON_PROMPT),
}

# Sentinel texts: (no credential, first observation), (no credential, update), service failure
FALLBACKS: dict[str, tuple[str, str, str]] = {
    "platform_update": (
        "Policy document summary available.",
        "Policy document has been updated. Please review manually.",
        "Summary could not be generated. Please review manually.",
    ),
    "policy_update": (
        "Government policy content detected.",
        "Policy content has been updated. Please review manually for AI-related changes.",
        "Policy summary could not be generated. Please review manually.",
    ),
}


class Summarizer:
    """Summarizes documents and document changes through an OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        kind: UpdateKind = "platform_update",
        model: str = DEFAULT_GENERATION_MODEL,
        base_url: str = DEFAULT_GENERATION_BASE_URL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.kind = kind
        self.model = model
        self.first_seen_text, self.updated_text, self.failed_text = FALLBACKS[kind]
        self._summary_prompt, self._comparison_prompt = PROMPTS[kind]
        # No credential is a normal condition: every call takes the fallback path
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.client = client

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self.client is not None:
            await self.client.close()

    def is_degraded(self, text: str) -> bool:
        """True if the text is one of the fallback sentinels rather than a real summary."""
        return text in (self.first_seen_text, self.updated_text, self.failed_text)

    def build_prompt(self, content: str, previous_content: Optional[str] = None, context: str = "") -> str:
        if previous_content is None:
            return self._summary_prompt.format(
                context=context,
                content=content[:FIRST_OBSERVATION_CHARS],
            )
        return self._comparison_prompt.format(
            context=context,
            previous=previous_content[:COMPARISON_CHARS],
            content=content[:COMPARISON_CHARS],
        )

    async def summarize(
        self,
        content: str,
        previous_content: Optional[str] = None,
        context: str = "",
    ) -> str:
        """
        Summarize a document, or the changes since its previous version.

        Args:
            content: New document content
            previous_content: Last committed content, None on first observation
            context: Source name used in the prompt

        Returns:
            Non-empty summary text, or a fallback sentinel when the service
            is unavailable. Never raises.
        """
        if self.client is None:
            logger.info("No generation service credential, using fallback summary")
            return self.first_seen_text if previous_content is None else self.updated_text

        prompt = self.build_prompt(content, previous_content, context)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as e:
            logger.warning("Error calling text generation service: %s", e)
            return self.failed_text

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.warning("Malformed response from text generation service: %s", e)
            return self.failed_text

        if not text or not text.strip():
            logger.warning("Empty response from text generation service")
            return self.failed_text

        return text.strip()
