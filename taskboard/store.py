"""
Store layer for accounts, projects and tasks.

Route handlers and services never query the database directly; they go
through the ``Store`` attached to the running application.  ``OwnedStore``
implements the owner-scoped CRUD shared by projects and tasks: every lookup
filters on ``owner_id`` so that a record owned by someone else looks exactly
like a record that does not exist.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import func, select

from taskboard.models import Account, Project, Task

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Project, Task)


class AccountStore:
    """Identity store: append-only collection of accounts."""

    def __init__(self, db: SQLAlchemy):
        self.db = db

    def find_by_email(self, email: str) -> Account | None:
        return self.db.session.scalar(select(Account).where(Account.email == email))

    def get(self, account_id: str) -> Account | None:
        return self.db.session.get(Account, account_id)

    def add(self, account: Account) -> Account:
        """Persist *account*.  Raises ``IntegrityError`` on a duplicate email."""
        self.db.session.add(account)
        try:
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise
        return account

    def count(self) -> int:
        return self.db.session.scalar(select(func.count()).select_from(Account)) or 0


class OwnedStore(Generic[RecordT]):
    """
    Owner-scoped CRUD over one record type.

    Subclasses set ``model``.  Records are returned in insertion order,
    which follows from the strictly increasing identifiers.
    """

    model: type[RecordT]

    def __init__(self, db: SQLAlchemy):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise

    def _owned(self, owner_id: str):
        return select(self.model).where(self.model.owner_id == owner_id)

    def list_for_owner(self, owner_id: str) -> list[RecordT]:
        stmt = self._owned(owner_id).order_by(self.model.created_at, self.model.id)
        return list(self.db.session.scalars(stmt).all())

    def get_owned(self, owner_id: str, record_id: str) -> RecordT | None:
        """Return the record only if it exists and belongs to *owner_id*."""
        return self.db.session.scalar(self._owned(owner_id).where(self.model.id == record_id))

    def create(self, owner_id: str, fields: dict[str, Any]) -> RecordT:
        """
        Create a record for *owner_id* from the allow-listed *fields*.

        Identity, ownership, creation time and the initial status are always
        assigned here, whatever the caller sent.
        """
        record = self.model(owner_id=owner_id)
        record.apply_changes(fields)
        record.status = self.model.DEFAULT_STATUS
        self.db.session.add(record)
        self._commit()
        return record

    def update(self, record: RecordT, changes: dict[str, Any]) -> RecordT:
        applied = record.apply_changes(changes)
        self._commit()
        logger.debug("Updated %s %s fields: %s", self.model.__name__, record.id, applied)
        return record

    def delete(self, record: RecordT) -> None:
        self.db.session.delete(record)
        self._commit()

    def count(self) -> int:
        return self.db.session.scalar(select(func.count()).select_from(self.model)) or 0


class ProjectStore(OwnedStore[Project]):
    model = Project


class TaskStore(OwnedStore[Task]):
    model = Task

    def count_with_status(self, owner_id: str, status: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Task)
            .where(Task.owner_id == owner_id, Task.status == status)
        )
        return self.db.session.scalar(stmt) or 0

    def priority_counts(self, owner_id: str) -> dict[str | None, int]:
        """Number of the owner's tasks per priority value."""
        stmt = (
            select(Task.priority, func.count())
            .where(Task.owner_id == owner_id)
            .group_by(Task.priority)
        )
        return {priority: count for priority, count in self.db.session.execute(stmt)}


class Store:
    """Container for the three collections, one instance per application."""

    def __init__(self, db: SQLAlchemy):
        self.accounts = AccountStore(db)
        self.projects = ProjectStore(db)
        self.tasks = TaskStore(db)


def get_store() -> Store:
    """Return the store attached to the current application."""
    return current_app.extensions["taskboard.store"]
