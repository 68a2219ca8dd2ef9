import logging
from functools import wraps

from jsonhttp.errors import JSONHTTPError
from jsonhttp.helpers.response_formatter import send_error
from jsonhttp.helpers.response_sink import BufferedResponseSink
from jsonhttp.utils.logger import get_logger


def error_response(message, status_code, logger=None):
    """Build a Flask response carrying a JSON error envelope."""
    sink = BufferedResponseSink()
    send_error(sink, message, status_code, logger=logger)
    return sink.to_response()


def handle_errors(f):
    """Middleware for consistent API error handling."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        logger = get_logger()
        try:
            return f(*args, **kwargs)
        except JSONHTTPError as e:
            logger.warning(f"{type(e).__name__} in {f.__name__}: {str(e)}")

            # Server-side failures only expose their detail in debug mode
            if e.status_code < 500 or logger.getEffectiveLevel() <= logging.DEBUG:
                message = str(e) or type(e).__name__
            else:
                message = "Internal server error"
            return error_response(message, e.status_code, logger)
        except Exception as e:
            logger.error(f"Error in {f.__name__}: {str(e)}")

            # Different error message based on environment
            if logger.getEffectiveLevel() <= logging.DEBUG:
                # In debug mode, include the full error message
                return error_response(f"Internal server error: {str(e)}", 500, logger)
            else:
                # In production, show a generic message
                return error_response("Internal server error", 500, logger)

    return decorated_function


def register_error_handlers(app):
    """Register global error handlers for the Flask app."""

    @app.errorhandler(404)
    def not_found(e):
        return error_response("Endpoint not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("Method not allowed", 405)

    @app.errorhandler(413)
    def request_too_large(e):
        return error_response("Request body too large", 413)

    @app.errorhandler(500)
    def server_error(e):
        return error_response("Internal server error", 500)
