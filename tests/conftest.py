import io
import logging
import os
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Add the project root to the path for proper imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from jsonhttp import create_app
from jsonhttp.helpers.response_sink import BufferedResponseSink
from jsonhttp.utils.config import DEFAULT_CONFIG


class RecordingSink:
    """Sink that records every call in order."""

    def __init__(self, fail_write=None):
        self.calls = []
        self.fail_write = fail_write

    def set_header(self, name, value):
        self.calls.append(("set_header", name, value))

    def write_status(self, status_code):
        self.calls.append(("write_status", status_code))

    def write(self, data):
        self.calls.append(("write", bytes(data)))
        if self.fail_write is not None:
            raise self.fail_write
        return len(data)


class FailingStream:
    """Body stream that breaks after returning ``prefix``."""

    def __init__(self, error, prefix=b""):
        self.error = error
        self.prefix = prefix

    def read(self, size=-1):
        if self.prefix:
            chunk, self.prefix = self.prefix, b""
            return chunk
        raise self.error


def build_request(body, content_length="auto"):
    """Build a request-like object with a body stream and a declared length."""
    if content_length == "auto":
        content_length = len(body)
    return SimpleNamespace(content_length=content_length, stream=io.BytesIO(body))


# Mock logger fixture
@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def sink():
    return BufferedResponseSink()


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def make_recording_sink():
    return RecordingSink


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def make_failing_stream():
    return FailingStream


@pytest.fixture
def app():
    config = {
        "logging": {"level": "DEBUG", "file": None, "colors": False},
        "server": dict(DEFAULT_CONFIG["server"]),
    }
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
