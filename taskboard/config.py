"""
Application configuration module.

Defines configuration classes for the development, testing and production
environments.  Values are read from environment variables with
development-friendly defaults; ``get_config`` resolves the class to load.

Key Concepts Demonstrated:
- Inheritance-based configuration hierarchy
- Environment variable overrides with sensible defaults
- In-memory SQLite storage that lives only as long as the process
- Token settings (signing secret, optional expiry)
"""

from __future__ import annotations

import os


def _optional_int(env_var: str) -> int | None:
    """Read an integer environment variable, treating unset or blank as ``None``."""
    raw_value = os.environ.get(env_var, "").strip()
    if not raw_value:
        return None
    return int(raw_value)


class Config:
    """
    Base configuration shared by all environments.

    Subclasses override only what differs.  The secret defaults are
    development values and must be replaced through the environment for any
    real deployment.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "taskboard-dev-secret-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Plain ``sqlite://`` is an in-memory database bound to this process
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("DATABASE_URL", "sqlite://")

    # Key used to sign and verify bearer tokens (HS256)
    JWT_SECRET_KEY: str = os.environ.get("JWT_SECRET_KEY", "taskboard-dev-jwt-secret-change-me")
    # Tokens never expire unless this is set
    JWT_EXPIRY_HOURS: int | None = _optional_int("JWT_EXPIRY_HOURS")

    # Werkzeug hashing method string, see werkzeug.security.generate_password_hash
    PASSWORD_HASH_METHOD: str = os.environ.get("PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Testing environment configuration.

    Keeps storage in memory, pins a known signing secret and uses a cheap
    hash iteration count so the suite does not spend its time in PBKDF2.
    """

    DEBUG: bool = True
    TESTING: bool = True

    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    JWT_SECRET_KEY: str = os.environ.get(
        "TEST_JWT_SECRET_KEY", "test-jwt-secret-key-for-local-tests-123456"
    )
    JWT_EXPIRY_HOURS: int | None = _optional_int("TEST_JWT_EXPIRY_HOURS")
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses the FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.  Unknown names
        fall back to ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
