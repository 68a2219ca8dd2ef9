"""Error types raised by the JSON response and request helpers.

Each class carries the HTTP status code the error handler answers with, so
callers can tell an oversized body from a malformed one from a transport
failure without parsing messages.
"""


class JSONHTTPError(Exception):
    """Base class for all helper errors."""

    status_code = 500


class ContractViolationError(JSONHTTPError, ValueError):
    """The caller passed an argument the helper cannot work with."""


class EncodingError(JSONHTTPError):
    """A value could not be serialized to JSON. Nothing was written."""


class TransportWriteError(JSONHTTPError):
    """Writing the response body failed after headers and status were sent."""

    def __init__(self, message, bytes_written=0):
        super().__init__(message)
        self.bytes_written = bytes_written


class RequestBodyTooLargeError(JSONHTTPError):
    """The declared or actual request body size exceeds the limit."""

    status_code = 413

    def __init__(self, message="Request body too large"):
        super().__init__(message)


class TransportReadError(JSONHTTPError):
    status_code = 400


class MalformedPayloadError(JSONHTTPError):
    status_code = 400


class HeadersAlreadySentError(RuntimeError):
    """A header was set after the status line had been written."""
