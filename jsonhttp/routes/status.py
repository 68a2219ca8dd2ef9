"""Status route for monitoring the reference server."""

from flask import Blueprint

from jsonhttp.helpers.response_formatter import send_success
from jsonhttp.helpers.response_sink import BufferedResponseSink
from jsonhttp.middleware.error_handler import handle_errors


def register_routes(app):
    """Register status routes with the Flask app."""

    bp = Blueprint('status', __name__)

    @bp.route('/status', methods=['GET'])
    @handle_errors
    def status_check():
        sink = BufferedResponseSink()
        send_success(sink, 'ok')
        return sink.to_response()

    app.register_blueprint(bp)
