"""
Error taxonomy and JSON error handlers.

Every failure a request can end in is an ``ApiError`` subclass carrying the
HTTP status it maps to.  Handlers registered by ``register_error_handlers``
turn them into the ``{"message": "..."}`` envelope used across the API.
Unexpected exceptions are logged and reported as a generic 500 so that no
internal detail reaches the client.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto a specific HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    """A required field is missing or the body is not a JSON object."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateAccount(ApiError):
    status_code = 400
    default_message = "User already exists"


class AccountNotFound(ApiError):
    status_code = 400
    default_message = "User not found"


class InvalidCredentials(ApiError):
    status_code = 400
    default_message = "Invalid password"


class MissingToken(ApiError):
    status_code = 401
    default_message = "Access token required"


class InvalidToken(ApiError):
    status_code = 403
    default_message = "Invalid token"


class NotFound(ApiError):
    """The record does not exist or belongs to another account."""

    status_code = 404
    default_message = "Resource not found"


class InternalError(ApiError):
    status_code = 500


def _json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build the standard ``{"message": ...}`` response tuple."""
    return jsonify({"message": message}), status_code


def register_error_handlers(app: Flask) -> None:
    """
    Install the JSON error handlers on *app*.

    ``ApiError`` and Werkzeug HTTP errors keep their own status codes.
    Anything else is logged with its traceback and answered with a 500.
    """

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        if error.status_code >= 500:
            logger.error("Request failed: %s", error.message)
        return _json_error(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> tuple[Response, int]:
        return _json_error(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
        logger.exception("Unhandled error while processing request")
        return _json_error(InternalError.default_message, 500)
