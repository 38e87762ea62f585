"""
Standardized API Error Responses

All API errors return: {"error": "code", "message": "human readable message"}
"""
from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


def api_error(code: str, message: str, status_code: int = 400, details=None):
    """
    Create a standardized API error response.

    Args:
        code: Machine-readable error code (e.g., 'invalid_payload', 'not_found')
        message: Human-readable error message
        status_code: HTTP status code (default 400)
        details: Optional extra context (validation errors per field)

    Example:
        return api_error('not_found', 'Proposition not found.', 404)
    """
    body = {
        'error': code,
        'message': message
    }
    if details:
        body['details'] = details
    response = jsonify(body)
    response.status_code = status_code
    return response


def register_error_handlers(blueprint):
    """
    Register error handlers for an API blueprint.
    Ensures all errors return JSON, not HTML.
    """

    @blueprint.errorhandler(404)
    def not_found(e):
        message = str(e.description) if hasattr(e, 'description') else 'Resource not found'
        return api_error('not_found', message, 404)

    @blueprint.errorhandler(405)
    def method_not_allowed(e):
        return api_error('method_not_allowed', 'Method not allowed for this endpoint.', 405)

    @blueprint.errorhandler(429)
    def rate_limited(e):
        return api_error(
            'rate_limited',
            'Too many requests. Please retry in 60 seconds.',
            429
        )

    @blueprint.errorhandler(500)
    def internal_error(e):
        current_app.logger.error(f'API Internal Error: {e}')
        return api_error(
            'internal_error',
            'An internal error occurred. Please try again later.',
            500
        )

    @blueprint.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle any other HTTP exceptions with JSON response."""
        return api_error(
            e.name.lower().replace(' ', '_'),
            e.description or str(e),
            e.code
        )
