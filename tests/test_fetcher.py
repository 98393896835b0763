"""
File Fetcher Tests
Unit tests for submission download over HTTP
"""
import pytest
import requests
from unittest.mock import Mock, patch

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from submission_relay.exceptions import FetchError
from submission_relay.fetcher import fetch


def make_response(status_code=200, content=b"", headers=None, url="https://example.com/file.zip"):
    """Build a real requests.Response for raise_for_status behaviour"""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.headers.update(headers or {})
    response.url = url
    response.reason = "Not Found" if status_code == 404 else "OK"
    return response


class TestFetch:
    """Test HTTP download behaviour"""

    @patch("submission_relay.fetcher.requests.get")
    def test_successful_download(self, mock_get):
        """200 response should return bytes and content type"""
        mock_get.return_value = make_response(
            content=b"PK\x03\x04data", headers={"Content-Type": "application/zip"}
        )

        content = fetch("https://example.com/file.zip", timeout=5)

        assert content.data == b"PK\x03\x04data"
        assert content.content_type == "application/zip"
        assert content.size == 8
        mock_get.assert_called_once_with("https://example.com/file.zip", timeout=5)

    @patch("submission_relay.fetcher.requests.get")
    def test_missing_content_type(self, mock_get):
        """Missing Content-Type header should give None"""
        mock_get.return_value = make_response(content=b"abc")

        content = fetch("https://example.com/file.zip")

        assert content.content_type is None

    @patch("submission_relay.fetcher.requests.get")
    def test_404_raises_fetch_error_with_reason(self, mock_get):
        """Non-2xx should raise FetchError carrying the HTTP error text"""
        mock_get.return_value = make_response(status_code=404)

        with pytest.raises(FetchError) as exc_info:
            fetch("https://example.com/file.zip")

        assert "404" in str(exc_info.value)
        assert "Not Found" in str(exc_info.value)

    @patch("submission_relay.fetcher.requests.get")
    def test_connection_error(self, mock_get):
        """Network failure should raise FetchError"""
        mock_get.side_effect = requests.exceptions.ConnectionError("Name or service not known")

        with pytest.raises(FetchError, match="Name or service not known"):
            fetch("https://unreachable.invalid/file.zip")

    @patch("submission_relay.fetcher.requests.get")
    def test_timeout(self, mock_get):
        """Timeout should raise FetchError mentioning the timeout"""
        mock_get.side_effect = requests.exceptions.ReadTimeout()

        with pytest.raises(FetchError, match="timed out after 3 seconds"):
            fetch("https://example.com/slow.zip", timeout=3)

    @patch("submission_relay.fetcher.requests.get")
    def test_invalid_url(self, mock_get):
        """Malformed URLs should raise FetchError"""
        mock_get.side_effect = requests.exceptions.MissingSchema("Invalid URL 'file.zip'")

        with pytest.raises(FetchError, match="Invalid URL"):
            fetch("file.zip")

    def test_empty_url(self):
        """Empty URL should raise FetchError without a request"""
        with patch("submission_relay.fetcher.requests.get") as mock_get:
            with pytest.raises(FetchError):
                fetch("")

            mock_get.assert_not_called()
