"""
Shared pytest fixtures for the Taskboard test suite.

Provides the Flask application, test client, a per-test database lifecycle,
bearer-token helpers and factories for accounts, projects and tasks.

Key Concepts Demonstrated:
- Session-scoped app with function-scoped database state
- Factory fixtures for flexible test-data creation
- Two independent accounts for ownership-isolation checks
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the app
os.environ["FLASK_ENV"] = "testing"

from taskboard import create_app, db
from taskboard.credentials import create_token
from taskboard.models import Account, Project, Task
from tests.helpers import auth_headers

fake = Faker()

DEFAULT_PASSWORD = "StrongPass123!"


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """Create the application once for the whole test session."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a fresh test client for each test."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide an empty database for each test.

    Tables are created before the test and dropped afterwards, so no
    account, project or task leaks into the next test.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def account_factory(app, db_session) -> Callable[..., Account]:
    """Return a callable that inserts an account with a hashed password."""

    def _create_account(
        username: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> Account:
        account = Account(
            username=username or fake.user_name(),
            email=email or fake.unique.email(),
        )
        account.set_password(password, method=app.config["PASSWORD_HASH_METHOD"])
        db_session.session.add(account)
        db_session.session.commit()
        return account

    return _create_account


@pytest.fixture
def project_factory(db_session) -> Callable[..., Project]:
    """Return a callable that inserts a project for a given owner."""

    def _create_project(owner: Account, **fields: Any) -> Project:
        project = Project(
            owner_id=owner.id,
            name=fields.pop("name", None) or fake.catch_phrase(),
            status=fields.pop("status", "active"),
            **fields,
        )
        db_session.session.add(project)
        db_session.session.commit()
        return project

    return _create_project


@pytest.fixture
def task_factory(db_session) -> Callable[..., Task]:
    """Return a callable that inserts a task for a given owner."""

    def _create_task(owner: Account, **fields: Any) -> Task:
        task = Task(
            owner_id=owner.id,
            title=fields.pop("title", None) or fake.sentence(nb_words=4),
            status=fields.pop("status", "pending"),
            priority=fields.pop("priority", "medium"),
            **fields,
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


# -----------------------------------------------------------------------------
# Identity Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def token_for(app) -> Callable[[Account], str]:
    """Return a callable that signs a token for an account."""

    def _token(account: Account) -> str:
        return create_token(account.id, account.email, app.config["JWT_SECRET_KEY"])

    return _token


@pytest.fixture
def alice(account_factory) -> Account:
    return account_factory(username="alice", email="alice@example.com")


@pytest.fixture
def bob(account_factory) -> Account:
    return account_factory(username="bob", email="bob@example.com")


@pytest.fixture
def alice_headers(alice, token_for) -> dict[str, str]:
    return auth_headers(token_for(alice))


@pytest.fixture
def bob_headers(bob, token_for) -> dict[str, str]:
    return auth_headers(token_for(bob))
