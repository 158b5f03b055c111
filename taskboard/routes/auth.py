"""
Account endpoints.

Endpoints:
    GET  /api/health    - Health check (public)
    POST /api/register  - Create an account and receive a token
    POST /api/login     - Exchange email and password for a token

Failures are raised as ``taskboard.errors`` exceptions and rendered by the
application's error handlers.
"""

from __future__ import annotations

import os

from flask import Blueprint, Response, jsonify

from taskboard.credentials import get_credential_service
from taskboard.validation import json_body, require_fields

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify(
        {
            "status": "healthy",
            "service": "taskboard",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }
    ), 200


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new account.

    Request Body (JSON):
        username: Display name (required)
        email: Login email, must not already be registered (required)
        password: Plain-text password (required)

    Returns:
        201 with ``token`` and the public ``user`` record.
        400 if a field is missing or the email is taken.
    """
    data = json_body()
    require_fields(data, ["username", "email", "password"])

    token, account = get_credential_service().register(
        username=data["username"],
        email=data["email"],
        password=data["password"],
    )
    return jsonify({"token": token, "user": account.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate with email and password.

    Returns:
        200 with ``token`` and ``user`` on success.
        400 if a field is missing, the email is unknown or the password
        is wrong.
    """
    data = json_body()
    require_fields(data, ["email", "password"])

    token, account = get_credential_service().login(
        email=data["email"],
        password=data["password"],
    )
    return jsonify({"token": token, "user": account.to_dict()}), 200
