"""
Access gate for protected endpoints.

``require_auth`` reads the ``Authorization: Bearer <token>`` header,
verifies the token with the credential service's signing secret and stores
the caller's identity on ``flask.g`` before the view runs.

- no header, a non-Bearer scheme or an empty token: ``MissingToken`` (401)
- bad signature, malformed token or unusable claims: ``InvalidToken`` (403)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps

from flask import current_app, g, request

from taskboard.credentials import decode_token
from taskboard.errors import InvalidToken, MissingToken

logger = logging.getLogger(__name__)


def extract_bearer_token() -> str | None:
    """Return the token from the current request's Authorization header, if any."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme != "Bearer":
        return None
    return token.strip() or None


def require_auth(view_func: Callable):
    """
    Decorator that rejects requests without a valid bearer token.

    On success ``g.account_id`` and ``g.email`` hold the token's claims for
    the rest of the request.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = extract_bearer_token()
        if token is None:
            raise MissingToken()

        try:
            payload = decode_token(token, current_app.config["JWT_SECRET_KEY"])
        except InvalidToken:
            logger.warning("Rejected request to %s: invalid token", request.path)
            raise

        g.account_id = payload["account_id"]
        g.email = payload["email"]
        return view_func(*args, **kwargs)

    return wrapper
