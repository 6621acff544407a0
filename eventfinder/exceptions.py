"""
EventFinder - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class EventFinderException(Exception):
    """Base exception for EventFinder"""
    status_code = 400

    def __init__(self, message: str, code: str = "EVENTFINDER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': True,
            'code': self.code,
            'message': self.message
        }


class ConfigurationException(EventFinderException):
    """Missing or invalid configuration, fatal at startup"""
    status_code = 500

    def __init__(self, message: str, missing=None):
        super().__init__(message, code="CONFIG_ERROR")
        self.missing = list(missing or [])
        logger.error(f"Configuration error: {message}")


class DatabaseException(EventFinderException):
    """Database-related exceptions"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="DATABASE_ERROR")
        logger.error(f"Database error: {message}")


class UpstreamException(EventFinderException):
    """
    Failure of a third-party API call.

    `upstream_status` is the HTTP status returned by the provider, if any.
    The response status mirrors it for error statuses and falls back to 500.
    """

    def __init__(self, message: str, provider: str = "upstream", upstream_status=None, details=None):
        super().__init__(message, code="UPSTREAM_ERROR")
        self.provider = provider
        self.upstream_status = upstream_status
        self.details = details
        logger.error(f"Upstream error ({provider}): {message}", upstream_status=upstream_status)

    @property
    def status_code(self):
        if isinstance(self.upstream_status, int) and 400 <= self.upstream_status <= 599:
            return self.upstream_status
        return 500


class ValidationException(EventFinderException):
    """Validation-related exceptions"""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
        logger.warning(f"Validation error: {message}")


class NotFoundException(EventFinderException):
    """Requested resource does not exist"""
    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, code="NOT_FOUND")
        logger.info(f"Not found: {message}")


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'error': True,
            'code': e.name.upper().replace(' ', '_'),
            'message': e.description
        }), e.code

    @app.errorhandler(EventFinderException)
    def handle_eventfinder_exception(e):
        """Handle EventFinder custom exceptions with their own status"""
        if e.status_code >= 500:
            logger.error(
                "Request failed",
                path=request.path,
                method=request.method,
                code=e.code,
                status=e.status_code,
                error=e.message,
            )
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception on {request.method} {request.path}: {e}", exc_info=True)
        return jsonify({
            'error': True,
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred'
        }), 500
