"""
Unit tests for the store layer.

Key SDET Concepts Demonstrated:
- Verifying owner scoping below the HTTP layer
- Server-assigned fields that callers cannot override
- Documenting the duplicate-registration race and how it resolves
"""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from taskboard.credentials import get_credential_service
from taskboard.errors import DuplicateAccount
from taskboard.models import Account
from taskboard.store import get_store

pytestmark = pytest.mark.unit


class TestOwnedStore:
    """Tests for owner-scoped project and task collections."""

    def test_create_stamps_server_fields(self, db_session, alice):
        # Act
        project = get_store().projects.create(
            alice.id,
            {"name": "P1", "status": "completed", "ownerId": "someone-else", "id": "1"},
        )

        # Assert
        assert project.owner_id == alice.id
        assert project.status == "active"
        assert project.id != "1"
        assert project.created_at is not None

    def test_task_default_status_is_pending(self, db_session, alice):
        task = get_store().tasks.create(alice.id, {"title": "T1", "priority": "low"})

        assert task.status == "pending"
        assert task.priority == "low"

    def test_list_for_owner_is_scoped_and_ordered(self, db_session, alice, bob):
        # Arrange
        store = get_store().projects
        first = store.create(alice.id, {"name": "first"})
        store.create(bob.id, {"name": "bob's"})
        second = store.create(alice.id, {"name": "second"})

        # Act
        projects = store.list_for_owner(alice.id)

        # Assert
        assert [project.id for project in projects] == [first.id, second.id]

    def test_get_owned_hides_other_owners_records(self, db_session, alice, bob):
        # Arrange
        store = get_store().tasks
        task = store.create(alice.id, {"title": "private"})

        # Act & Assert
        assert store.get_owned(alice.id, task.id) is task
        assert store.get_owned(bob.id, task.id) is None

    def test_update_and_delete(self, db_session, alice):
        # Arrange
        store = get_store().projects
        project = store.create(alice.id, {"name": "P"})

        # Act & Assert
        store.update(project, {"status": "on-hold", "ownerId": "x"})
        assert project.status == "on-hold"
        assert project.owner_id == alice.id

        store.delete(project)
        assert store.list_for_owner(alice.id) == []

    def test_failed_update_rolls_back_and_leaves_session_usable(self, db_session, alice):
        # Arrange
        store = get_store().projects
        project = store.create(alice.id, {"name": "Kept"})
        project_id = project.id

        # Act
        with pytest.raises(IntegrityError):
            store.update(project, {"name": None})

        # Assert
        reloaded = store.get_owned(alice.id, project_id)
        assert reloaded.name == "Kept"
        assert store.create(alice.id, {"name": "After"}).name == "After"

    def test_counts(self, db_session, alice, bob, project_factory, task_factory):
        # Arrange
        project_factory(alice)
        task_factory(alice)
        task_factory(bob)
        store = get_store()

        # Assert
        assert store.accounts.count() == 2
        assert store.projects.count() == 1
        assert store.tasks.count() == 2


class TestAccountStore:
    """Tests for the append-only account collection."""

    def test_find_by_email(self, db_session, alice):
        accounts = get_store().accounts

        assert accounts.find_by_email("alice@example.com").id == alice.id
        assert accounts.find_by_email("ALICE@example.com") is None

    def test_concurrent_duplicate_registration_is_rejected(self, db_session, alice, monkeypatch):
        """
        Simulate two registrations that both passed the duplicate check.

        The second one reaches the insert with the email already taken; the
        unique email constraint turns it into ``DuplicateAccount``.
        """
        # Arrange - the pre-insert check misses the existing account
        accounts = get_store().accounts
        monkeypatch.setattr(accounts, "find_by_email", lambda email: None)

        # Act & Assert
        with pytest.raises(DuplicateAccount):
            get_credential_service().register("alice-again", "alice@example.com", "pw")
        assert db_session.session.query(Account).filter_by(email="alice@example.com").count() == 1
