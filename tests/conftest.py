"""Shared test helpers and fixtures."""

import json
from typing import Any, List, Tuple
from unittest.mock import AsyncMock

import pytest

from sabnzbd_api import SabnzbdClient

HOST = "http://localhost:8080"
API_KEY = "test-key"


@pytest.fixture
def client() -> SabnzbdClient:
    """Create a basic SabnzbdClient for testing."""
    return SabnzbdClient(host=HOST, api_key=API_KEY)


def respond(document: Any, status: int = 200) -> AsyncMock:
    """Build a ``_send`` replacement returning ``document`` as a JSON body."""
    body = document if isinstance(document, (bytes, str)) else json.dumps(document)
    if isinstance(body, str):
        body = body.encode("utf-8")
    return AsyncMock(return_value=(status, body))


def sent_fields(mock_send: AsyncMock) -> List[Tuple[str, str]]:
    """Ordered fields of the single request handed to ``_send``."""
    mock_send.assert_called_once()
    request = mock_send.call_args.args[0]
    if request.http_method == "GET":
        return list(request.url.query.items())
    return list(request.fields)


def sent_args(mock_send: AsyncMock) -> dict:
    """Caller-supplied fields of the request, without the mandatory trio."""
    return {
        k: v
        for k, v in sent_fields(mock_send)
        if k not in ("mode", "output", "apikey")
    }
