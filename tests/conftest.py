"""Pytest fixtures."""

import json

import httpx
import pytest

from hookflow_config.settings import Settings


@pytest.fixture
def settings():
    """Settings pointing at a fake n8n instance."""
    return Settings(
        N8N_API_KEY="test-api-key",
        N8N_BASE_URL="https://n8n.example.com/",
        WEBHOOK_TIMEOUT_SECONDS=30,
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def json_body(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport
