"""Pytest configuration and fixtures."""
import json
import os
from unittest.mock import MagicMock

import pytest

# Set test environment variables
os.environ["FETIAS_NODES_ENV"] = "test"
os.environ["FETIAS_NODES_LOG_LEVEL"] = "DEBUG"


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached settings around every test."""
    from fetias_nodes.config import reset_settings

    reset_settings()
    yield
    reset_settings()


def build_response(status_code=200, payload=None, reason=None, method="GET"):
    """Stand-in for a requests.Response; payload None means an empty body."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason if reason is not None else ("OK" if response.ok else "Error")
    response.url = "https://api.test/"
    response.request.method = method

    if payload is None:
        response.content = b""
        response.text = ""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    elif isinstance(payload, str):
        response.content = payload.encode()
        response.text = payload
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        text = json.dumps(payload)
        response.content = text.encode()
        response.text = text
        response.json.return_value = payload
    return response


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return build_response


@pytest.fixture
def fetias_credentials():
    return {"apiKey": "test-api-key"}


@pytest.fixture
def halopsa_credentials():
    return {
        "hostingType": "onPremise",
        "authUrl": "https://halo.test/auth",
        "resourceApiUrl": "https://halo.test/api",
        "client_id": "client-123",
        "client_secret": "secret-456",
        "scope": "all",
    }


@pytest.fixture
def runner():
    """NodeRunner holding this package's nodes."""
    from fetias_nodes.node_sdk import NodeRunner

    return NodeRunner()
