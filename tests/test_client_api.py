"""Tests for the httpx API client used by the terminal UI."""

import json

import httpx
import pytest

from client.api import DreamApiClient
from client.state import GENERIC_FAILURE
from shared.errors import ClientError


def client_for(handler):
    return DreamApiClient("http://dreamlens.test/", transport=httpx.MockTransport(handler))


class TestDreamApiClient:
    def test_posts_payload_and_returns_analysis(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"analysis": "a tide of light"})

        assert client_for(handler).analyze("The sea glowed", ["Peace"]) == "a tide of light"
        assert seen == {"path": "/api/analyze", "body": {"dream": "The sea glowed", "emotions": ["Peace"]}}

    def test_error_body_message_is_used(self):
        client = client_for(lambda r: httpx.Response(400, json={"error": "Missing dream or emotions"}))
        with pytest.raises(ClientError) as exc:
            client.analyze("", [])
        assert exc.value.message == "Missing dream or emotions"

    def test_error_without_body_is_unknown(self):
        client = client_for(lambda r: httpx.Response(502, text="Bad gateway"))
        with pytest.raises(ClientError) as exc:
            client.analyze("x", ["Joy"])
        assert exc.value.message == "Unknown error"

    def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ClientError) as exc:
            client_for(handler).analyze("x", ["Joy"])
        assert exc.value.message == GENERIC_FAILURE

    def test_base_url_trailing_slash(self):
        assert DreamApiClient("http://h:8000/").base_url == "http://h:8000"
