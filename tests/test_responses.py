"""Tests for handler factories."""

import time

from mockwebserver.utils.responses import (
    delayed,
    echo_response,
    json_response,
    status_response,
    text_response,
)
from helpers import fetch


class TestResponseFactories:
    """Test the handler factories against a running server."""

    def test_text_response(self, mock_server):
        mock_server.enqueue(text_response("hello", status=202, headers={"X-A": "b"}))

        resp = fetch("GET", mock_server.base_url)

        assert resp.status_code == 202
        assert resp.text == "hello"
        assert resp.headers["Content-Type"].startswith("text/plain")
        assert resp.headers["X-A"] == "b"

    def test_json_response(self, mock_server):
        mock_server.enqueue(json_response({"items": [1, 2]}, status=201))

        resp = fetch("GET", mock_server.base_url)

        assert resp.status_code == 201
        assert resp.json() == {"items": [1, 2]}

    def test_status_response(self, mock_server):
        mock_server.enqueue(status_response(404))

        resp = fetch("GET", mock_server.base_url)

        assert resp.status_code == 404
        assert resp.text == ""

    def test_echo_response(self, mock_server):
        """Test the request body and content type are echoed."""
        mock_server.enqueue(echo_response())

        resp = fetch(
            "POST",
            mock_server.base_url,
            data=b"<ping/>",
            headers={"Content-Type": "application/xml"},
        )

        assert resp.content == b"<ping/>"
        assert resp.headers["Content-Type"] == "application/xml"

    def test_delayed(self, mock_server):
        """Test the wrapped handler responds after the delay."""
        mock_server.enqueue(delayed(lambda req: ("late", 200), 0.3))

        start = time.monotonic()
        resp = fetch("GET", mock_server.base_url)

        assert resp.text == "late"
        assert time.monotonic() - start >= 0.3
