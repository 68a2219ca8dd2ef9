"""Write JSON responses to a response sink.

All senders follow the same sequence: serialize, set the content type,
write the status, write the body, and return the number of bytes written.
Serialization happens before anything touches the sink, so an encoding
failure leaves the response untouched.
"""

import dataclasses
import json

from jsonhttp.errors import ContractViolationError, EncodingError, TransportWriteError
from jsonhttp.utils.logger import get_logger

JSON_CONTENT_TYPE = "application/json"

# Longest payload text written to the log before it is cut
LOG_PAYLOAD_LIMIT = 1024


def _default(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _marshal(data, logger, what="data"):
    try:
        text = json.dumps(
            data,
            default=_default,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        msg = f"Could not marshal {what} into payload, {e}"
        logger.error(msg)
        raise EncodingError(msg) from e
    return text.encode("utf-8")


def _write(sink, payload, status_code, logger):
    sink.set_header("Content-Type", JSON_CONTENT_TYPE)
    sink.write_status(status_code)

    try:
        return sink.write(payload)
    except (OSError, ValueError) as e:
        msg = f"There was an error sending the response, {e}"
        logger.error(msg)
        raise TransportWriteError(msg) from e


def _preview(payload):
    text = payload.decode("utf-8")
    if len(text) <= LOG_PAYLOAD_LIMIT:
        return text
    return f"{text[:LOG_PAYLOAD_LIMIT]}... ({len(payload)} bytes)"


def send_error(sink, message, status_code, logger=None):
    """Send ``{"message": message}`` with the given error status code.

    Raises ContractViolationError for an empty message before anything is
    written to the sink.
    """
    logger = logger or get_logger()

    if not message:
        msg = "message must not be an empty string"
        logger.error(msg)
        raise ContractViolationError(msg)

    payload = _marshal({"message": message}, logger, what="message")
    logger.warning(f"Sending error {status_code}: {message}")
    return _write(sink, payload, status_code, logger)


def send_success(sink, message, logger=None):
    """Send ``{"message": message}`` with status 200."""
    logger = logger or get_logger()

    payload = _marshal({"message": message}, logger)
    bytes_written = _write(sink, payload, 200, logger)

    logger.info(f"Sent {_preview(payload)}")
    return bytes_written


def send_data(sink, data, status_code, logger=None):
    """Send ``data`` encoded as JSON with the given status code.

    Dataclass instances are encoded as their field mapping; anything else
    must be natively JSON serializable.
    """
    logger = logger or get_logger()

    payload = _marshal(data, logger)
    bytes_written = _write(sink, payload, status_code, logger)

    logger.info(f"Sent {_preview(payload)}")
    return bytes_written
