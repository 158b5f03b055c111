"""Test helper functions used across the test suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt


def auth_headers(token: str) -> dict[str, str]:
    """Build common JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def forge_token(
    secret: str,
    *,
    account_id: Any = "1700000000000",
    email: Any = "someone@example.com",
    expired: bool = False,
    algorithm: str = "HS256",
    **extra_claims: Any,
) -> str:
    """Sign an arbitrary claim set, for negative-path token tests."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "account_id": account_id,
        "email": email,
        "iat": int(now.timestamp()),
        **extra_claims,
    }
    if expired:
        payload["exp"] = int((now - timedelta(hours=1)).timestamp())
    return jwt.encode(payload, secret, algorithm=algorithm)
