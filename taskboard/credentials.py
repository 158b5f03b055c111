"""
Credential service: registration, login and bearer tokens.

Passwords are hashed with Werkzeug's salted one-way hashing and tokens are
HS256 JSON Web Tokens signed with the server-held ``JWT_SECRET_KEY``.

Token structure (claims):
    - ``account_id`` -- identifier of the authenticated account.
    - ``email``      -- the account's login email.
    - ``iat``        -- issued-at timestamp (UTC epoch seconds).
    - ``exp``        -- expiration timestamp, present only when
      ``JWT_EXPIRY_HOURS`` is configured.  Without it a token stays valid
      for as long as the signing secret does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from taskboard.errors import AccountNotFound, DuplicateAccount, InvalidCredentials, InvalidToken
from taskboard.models import Account
from taskboard.store import AccountStore, get_store

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
REQUIRED_TOKEN_CLAIMS = ["account_id", "email", "iat"]


def create_token(
    account_id: str,
    email: str,
    secret_key: str,
    expiry_hours: int | None = None,
) -> str:
    """
    Create a signed JWT binding an account id and email.

    Args:
        account_id: Identifier of the account.  Must be non-empty.
        email: Email of the account.  Must be non-empty.
        secret_key: HMAC secret used to sign the token.
        expiry_hours: Hours until expiry, or ``None`` for a token that
            does not expire.

    Returns:
        A compact JWS string suitable for an ``Authorization: Bearer`` header.

    Raises:
        ValueError: If *account_id* or *email* is blank.
    """
    if not isinstance(account_id, str) or not account_id.strip():
        raise ValueError("account_id must be a non-empty string")
    if not isinstance(email, str) or not email.strip():
        raise ValueError("email must be a non-empty string")

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "account_id": account_id,
        "email": email,
        "iat": int(now.timestamp()),
    }
    if expiry_hours is not None:
        payload["exp"] = int((now + timedelta(hours=int(expiry_hours))).timestamp())
    return jwt.encode(payload, secret_key, algorithm=TOKEN_ALGORITHM)


def decode_token(token: str, secret_key: str) -> dict[str, Any]:
    """
    Verify a token and return its claims.

    Checks the signature, the expiry when an ``exp`` claim is present, and
    that ``account_id`` and ``email`` are non-empty strings.

    Raises:
        InvalidToken: If the token is malformed, tampered with, expired or
            carries unusable claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": REQUIRED_TOKEN_CLAIMS},
        )
    except jwt.InvalidTokenError as exc:
        raise InvalidToken() from exc

    for claim in ("account_id", "email"):
        value = payload.get(claim)
        if not isinstance(value, str) or not value.strip():
            raise InvalidToken()
    return payload


@dataclass
class CredentialService:
    """Registers accounts and exchanges credentials for tokens."""

    accounts: AccountStore
    secret_key: str
    expiry_hours: int | None = None
    hash_method: str = "pbkdf2:sha256"

    def issue_token(self, account: Account) -> str:
        return create_token(account.id, account.email, self.secret_key, self.expiry_hours)

    def register(self, username: str, email: str, password: str) -> tuple[str, Account]:
        """
        Create an account and return ``(token, account)``.

        Raises:
            DuplicateAccount: If the email is already registered.
        """
        if self.accounts.find_by_email(email) is not None:
            logger.warning("Registration rejected: email already registered")
            raise DuplicateAccount()

        account = Account(username=username, email=email)
        account.set_password(password, method=self.hash_method)
        try:
            self.accounts.add(account)
        except IntegrityError as exc:
            # Another registration for the same email committed first
            raise DuplicateAccount() from exc

        logger.info("Registered account %s", account.id)
        return self.issue_token(account), account

    def login(self, email: str, password: str) -> tuple[str, Account]:
        """
        Verify credentials and return ``(token, account)``.

        Raises:
            AccountNotFound: If no account has this email.
            InvalidCredentials: If the password does not match.
        """
        account = self.accounts.find_by_email(email)
        if account is None:
            logger.warning("Login failed: unknown email")
            raise AccountNotFound()
        if not account.check_password(password):
            logger.warning("Login failed for account %s: bad password", account.id)
            raise InvalidCredentials()

        logger.info("Account %s logged in", account.id)
        return self.issue_token(account), account


def get_credential_service() -> CredentialService:
    """Build the credential service for the current application."""
    return CredentialService(
        accounts=get_store().accounts,
        secret_key=current_app.config["JWT_SECRET_KEY"],
        expiry_hours=current_app.config.get("JWT_EXPIRY_HOURS"),
        hash_method=current_app.config.get("PASSWORD_HASH_METHOD", "pbkdf2:sha256"),
    )
