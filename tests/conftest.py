"""Pytest configuration and fixtures for Hue REST client tests."""

import json

import pytest
from pathlib import Path
from unittest.mock import MagicMock

from hue_rest.core.debug import MSG_DEBUG
from hue_rest.core.runtime import HueRestRuntime


def make_response(body, status_code=200):
    """Build a fake requests.Response carrying a JSON (or raw bytes) body."""
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, bytes):
        response.content = body
    else:
        response.content = json.dumps(body).encode('utf-8')
    return response


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def runtime():
    """Initialised runtime; any contexts left alive are cleaned up afterwards."""
    runtime = HueRestRuntime()
    assert runtime.init() is True
    yield runtime
    for ctx in runtime.contexts:
        ctx.cleanup()
    runtime.cleanup()


@pytest.fixture
def messages():
    """Messages captured by the debug sink as (level, text) tuples."""
    return []


@pytest.fixture
def ctx(runtime, messages):
    """Registered context for a bridge at 192.168.1.10 with a mocked session."""
    context = runtime.create_context(
        '192.168.1.10', 443, 'test-user',
        debug_sink=lambda level, message: messages.append((level, message)),
        debug_level=MSG_DEBUG,
        device_name='testhost',
    )
    assert context is not None
    context.session = MagicMock()
    return context
