"""Routes that decode a JSON request body and send it back."""

from dataclasses import dataclass

from flask import Blueprint, request

from jsonhttp.helpers.request_parser import decode_data
from jsonhttp.helpers.response_formatter import send_data
from jsonhttp.helpers.response_sink import BufferedResponseSink
from jsonhttp.middleware.error_handler import handle_errors


@dataclass
class Item:
    id: int = 0
    name: str = ""


def register_routes(app):
    """Register echo routes with the Flask app."""

    bp = Blueprint('echo', __name__)

    @bp.route('/api/echo', methods=['POST'])
    @handle_errors
    def echo():
        """Send back whatever JSON value was posted."""
        payload = decode_data(request)

        sink = BufferedResponseSink()
        send_data(sink, payload, 201)
        return sink.to_response()

    @bp.route('/api/items', methods=['POST'])
    @handle_errors
    def create_item():
        """Decode the body into an Item and send it back."""
        item = decode_data(request, Item())

        sink = BufferedResponseSink()
        send_data(sink, item, 201)
        return sink.to_response()

    app.register_blueprint(bp)
