"""JSON response and request helpers for Flask/Werkzeug servers.

The helpers live in ``jsonhttp.helpers``; ``create_app`` builds a small
reference server that wires them into Flask.
"""

from flask import Flask

from jsonhttp.errors import (
    ContractViolationError,
    EncodingError,
    JSONHTTPError,
    MalformedPayloadError,
    RequestBodyTooLargeError,
    TransportReadError,
    TransportWriteError,
)
from jsonhttp.helpers.request_parser import MAX_POST_SIZE, decode_data
from jsonhttp.helpers.response_formatter import send_data, send_error, send_success
from jsonhttp.helpers.response_sink import BufferedResponseSink, ResponseSink
from jsonhttp.middleware.error_handler import register_error_handlers
from jsonhttp.utils.config import load_config
from jsonhttp.utils.logger import setup_logger

__all__ = [
    "BufferedResponseSink",
    "ContractViolationError",
    "EncodingError",
    "JSONHTTPError",
    "MAX_POST_SIZE",
    "MalformedPayloadError",
    "RequestBodyTooLargeError",
    "ResponseSink",
    "TransportReadError",
    "TransportWriteError",
    "create_app",
    "decode_data",
    "send_data",
    "send_error",
    "send_success",
]


def create_app(config=None):
    """Create and configure the reference Flask application."""
    from jsonhttp.routes import echo, status

    if config is None:
        config = load_config()

    logging_config = config.get("logging", {})
    setup_logger(
        logging_config.get("level", "INFO"),
        log_file=logging_config.get("file"),
        enable_colors=logging_config.get("colors", True),
    )

    app = Flask(__name__)
    app.config["JSONHTTP"] = config

    # Register error handlers
    register_error_handlers(app)

    # Register route handlers
    status.register_routes(app)
    echo.register_routes(app)

    return app
