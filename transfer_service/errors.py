"""
Error handlers - Transfer Service
Every failure leaves the API as the same JSON shape:
{ status, error, message, path, timestamp, field_errors }
"""

import logging
from datetime import datetime, timezone

from flask import jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException, UnsupportedMediaType

from transfer_service.exceptions import PaymentError, RequestValidationError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"TXN_NOT_FOUND"}


def api_error(status, error, message, field_errors=None):
    body = {
        "status":       status,
        "error":        error,
        "message":      message,
        "path":         request.path,
        "timestamp":    datetime.now(timezone.utc).isoformat(),
        "field_errors": field_errors or [],
    }
    return jsonify(body), status


def register_error_handlers(app):

    @app.errorhandler(PaymentError)
    def handle_payment_error(e):
        logger.warning("Payment error: %s - %s", e.error_code, e.message)
        status = 404 if e.error_code in NOT_FOUND_CODES else 400
        return api_error(status, e.error_code, e.message)

    @app.errorhandler(RequestValidationError)
    def handle_validation_error(e):
        logger.warning("Validation error: %s", e.field_errors)
        return api_error(400, "VALIDATION_ERROR", e.message, e.field_errors)

    @app.errorhandler(BadRequest)
    def handle_bad_request(e):
        logger.warning("Message not readable: %s", e.description)
        message = "Request body is required" if not request.get_data() else "Invalid JSON format"
        return api_error(400, "INVALID_REQUEST_BODY", message)

    @app.errorhandler(UnsupportedMediaType)
    def handle_unsupported_media_type(e):
        logger.warning("Unsupported media type: %s", request.content_type)
        return api_error(
            415,
            "UNSUPPORTED_MEDIA_TYPE",
            f"Content-Type '{request.content_type}' is not supported. Use 'application/json'",
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        error = (e.name or "HTTP_ERROR").upper().replace(" ", "_")
        return api_error(e.code, error, e.description)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unexpected error on %s %s", request.method, request.path)
        return api_error(500, "INTERNAL_ERROR", "An unexpected error occurred. Please try again later.")
