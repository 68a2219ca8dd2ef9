"""Response sinks the JSON helpers write to.

A sink is anything with ``set_header``, ``write_status`` and ``write``.
``BufferedResponseSink`` keeps everything in memory and turns it into a
Flask response once the view is done writing.
"""

from typing import Optional, Protocol

from flask import Response
from werkzeug.datastructures import Headers

from jsonhttp.errors import HeadersAlreadySentError


class ResponseSink(Protocol):
    def set_header(self, name: str, value: str) -> None: ...

    def write_status(self, status_code: int) -> None: ...

    def write(self, data: bytes) -> int: ...


class BufferedResponseSink:
    """In-memory sink that enforces header, status, body ordering."""

    def __init__(self):
        self.headers = Headers()
        self.status_code: Optional[int] = None
        self.body = bytearray()

    @property
    def status_written(self) -> bool:
        return self.status_code is not None

    def set_header(self, name: str, value: str) -> None:
        if self.status_written:
            raise HeadersAlreadySentError(
                f"Cannot set header {name!r} after status {self.status_code} was written"
            )
        self.headers.set(name, value)

    def write_status(self, status_code: int) -> None:
        if self.status_written:
            raise HeadersAlreadySentError(
                f"Status already written as {self.status_code}, got {status_code}"
            )
        self.status_code = status_code

    def write(self, data: bytes) -> int:
        # Writing a body commits an implicit 200, as WSGI servers do.
        if not self.status_written:
            self.write_status(200)
        self.body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Build the Flask response for everything written so far."""
        return Response(
            bytes(self.body),
            status=self.status_code or 200,
            headers=self.headers,
        )
