"""Keyword pre-filter for AI-related government policy content."""

from __future__ import annotations

AI_KEYWORDS: tuple[str, ...] = (
    "artificial intelligence",
    "machine learning",
    "ai technology",
    "ai system",
    "automated decision",
    "algorithm",
    "ai governance",
    "ai strategy",
    "generative ai",
    "large language model",
    "chatbot",
    "ai tool",
    "ai ethics",
    "ai regulation",
    "ai policy",
    "ai guideline",
)


class RelevanceFilter:
    """Case-insensitive substring match against a fixed vocabulary."""

    def __init__(self, keywords: tuple[str, ...] = AI_KEYWORDS):
        self.keywords = tuple(k.lower() for k in keywords)

    def is_relevant(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)

    def passes(self, content: str, summary: str) -> bool:
        """Gate for reporting: either the document or its summary must be relevant."""
        return self.is_relevant(content) or self.is_relevant(summary)
