"""Plain HTTP document fetching."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin

import requests

USER_AGENT = (
    "Mozilla/5.0 (compatible; AI-Steward-Tracker/1.0; "
    "+https://github.com/Thomas-Amann-IPAustralia/ai-steward-tracker)"
)

REDIRECT_STATUSES = (301, 302)


class FetchError(Exception):
    """A document could not be retrieved."""

    def __init__(self, url: str, status_code: Optional[int] = None, message: str = ""):
        self.url = url
        self.status_code = status_code
        if not message:
            message = f"HTTP {status_code} for {url}" if status_code else f"Request failed for {url}"
        super().__init__(message)


class FetchTimeoutError(FetchError):
    """The request did not complete within the timeout."""


class ContentFetcher:
    """Fetches raw document content, following at most one redirect.

    Deeper redirect chains are not followed: a redirect returned by the
    second request is treated like any other non-2xx status.
    """

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-AU,en;q=0.5",
                "Accept-Encoding": "identity",
            }
        )

    def close(self) -> None:
        self.session.close()

    def _get(self, url: str, timeout: float) -> requests.Response:
        try:
            return self.session.get(url, timeout=timeout, allow_redirects=False)
        except requests.Timeout as e:
            raise FetchTimeoutError(url, message=f"Timeout after {timeout}s for {url}") from e
        except requests.RequestException as e:
            raise FetchError(url, message=f"Request failed for {url}: {e}") from e

    def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        """
        Fetch the body of a document.

        Args:
            url: Document URL
            timeout: Per-request timeout in seconds (defaults to the fetcher's)

        Returns:
            The response body as text

        Raises:
            FetchTimeoutError: If a request times out
            FetchError: On network failure or a non-2xx terminal status
        """
        timeout = timeout if timeout is not None else self.timeout
        response = self._get(url, timeout)

        if response.status_code in REDIRECT_STATUSES:
            location = response.headers.get("Location")
            if not location:
                raise FetchError(url, response.status_code, f"Redirect without Location for {url}")
            target = urljoin(url, location)
            response = self._get(target, timeout)
            if not 200 <= response.status_code < 300:
                raise FetchError(target, response.status_code)
            return response.text

        if not 200 <= response.status_code < 300:
            raise FetchError(url, response.status_code)

        return response.text
