"""Tests for ContentFetcher."""

from unittest.mock import MagicMock

import pytest
import requests

from steward_tracker.fetcher import USER_AGENT, ContentFetcher, FetchError, FetchTimeoutError


def _response(status_code: int, text: str = "", headers: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    return response


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.headers = {}
    return session


class TestContentFetcher:
    """Tests for ContentFetcher.fetch."""

    def test_sets_identifying_user_agent(self, session):
        ContentFetcher(session=session)
        assert session.headers["User-Agent"] == USER_AGENT

    def test_close_closes_session(self, session):
        ContentFetcher(session=session).close()
        session.close.assert_called_once()

    def test_returns_body_on_200(self, session):
        session.get.return_value = _response(200, "<html>terms</html>")
        fetcher = ContentFetcher(timeout=5, session=session)

        assert fetcher.fetch("https://acme.example/terms") == "<html>terms</html>"
        session.get.assert_called_once_with(
            "https://acme.example/terms", timeout=5, allow_redirects=False
        )

    def test_explicit_timeout_overrides_default(self, session):
        session.get.return_value = _response(200, "ok")
        fetcher = ContentFetcher(timeout=30, session=session)

        fetcher.fetch("https://acme.example/terms", timeout=2)

        assert session.get.call_args.kwargs["timeout"] == 2

    def test_follows_one_redirect(self, session):
        session.get.side_effect = [
            _response(301, headers={"Location": "/legal/terms"}),
            _response(200, "moved content"),
        ]
        fetcher = ContentFetcher(session=session)

        assert fetcher.fetch("https://acme.example/terms") == "moved content"
        assert session.get.call_args_list[1].args[0] == "https://acme.example/legal/terms"

    def test_does_not_follow_second_redirect(self, session):
        session.get.side_effect = [
            _response(302, headers={"Location": "https://a.example/one"}),
            _response(302, headers={"Location": "https://a.example/two"}),
        ]
        fetcher = ContentFetcher(session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("https://acme.example/terms")

        assert exc_info.value.status_code == 302
        assert session.get.call_count == 2

    def test_redirect_without_location_fails(self, session):
        session.get.return_value = _response(301)
        fetcher = ContentFetcher(session=session)

        with pytest.raises(FetchError):
            fetcher.fetch("https://acme.example/terms")

    def test_non_2xx_raises_with_status_and_url(self, session):
        session.get.return_value = _response(404)
        fetcher = ContentFetcher(session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("https://acme.example/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://acme.example/missing"
        assert "HTTP 404" in str(exc_info.value)

    def test_timeout_raises_timeout_error(self, session):
        session.get.side_effect = requests.Timeout("read timed out")
        fetcher = ContentFetcher(timeout=1, session=session)

        with pytest.raises(FetchTimeoutError):
            fetcher.fetch("https://slow.example/page")

    def test_network_error_is_not_a_timeout(self, session):
        session.get.side_effect = requests.ConnectionError("connection refused")
        fetcher = ContentFetcher(session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("https://down.example/page")

        assert not isinstance(exc_info.value, FetchTimeoutError)
        assert exc_info.value.status_code is None
