"""
Database models for the Taskboard API.

Defines the SQLAlchemy models for accounts, projects and tasks together with
the identifier generator they share.  Projects and tasks are owned records:
each carries the ``owner_id`` of the account that created it, and every read
or write in the API layer is scoped by it.

Serialised forms use the camelCase keys the client application expects
(``ownerId``, ``createdAt``, ``projectId``, ``dueDate``).
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from taskboard import db

_id_lock = threading.Lock()
_last_id = 0


def fresh_id() -> str:
    """
    Return a new record identifier derived from the current time.

    Identifiers are millisecond timestamps, bumped forward when two calls land
    in the same millisecond, so they are unique and strictly increasing for
    the lifetime of the process.
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc_iso(value: datetime | None) -> str | None:
    """
    Convert a datetime to an ISO-8601 UTC string.

    SQLite hands back naive datetimes even for timezone-aware columns, so
    naive values are taken to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


class ProjectStatus(str, Enum):
    """Project statuses used by the client.  Not enforced on update."""

    ACTIVE = "active"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    """Task statuses used by the client.  Not enforced on update."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Priorities reported by the analytics breakdown."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Account(db.Model):
    """
    Registered account.

    Accounts are created on registration and never updated or deleted.  The
    ``email`` column is unique, which also closes the window where two
    concurrent registrations pass the duplicate check together.

    Attributes:
        id: Timestamp-derived identifier.
        username: Display name, not required to be unique.
        email: Login identifier, unique and matched case-sensitively.
        password_hash: Werkzeug-generated salted hash of the password.
    """

    __tablename__ = "accounts"

    id: str = db.Column(db.String(20), primary_key=True, default=fresh_id)
    username: str = db.Column(db.String(120), nullable=False)
    email: str = db.Column(db.String(254), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)

    def set_password(self, password: str, method: str = "pbkdf2:sha256") -> None:
        """Hash and store a plain-text password."""
        self.password_hash = generate_password_hash(password, method=method)

    def check_password(self, password: str) -> bool:
        """Return ``True`` if *password* matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict[str, Any]:
        """Public representation; the password hash is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
        }

    def __repr__(self) -> str:
        return f"<Account {self.id}: {self.email}>"


class OwnedRecordMixin:
    """
    Columns and helpers shared by projects and tasks.

    Subclasses declare ``MUTABLE_FIELDS``: a mapping from the JSON key a
    client may send on update to the attribute it sets.  Keys outside that
    mapping (``id``, ``ownerId``, ``createdAt`` or anything unknown) are
    never written from a request body.  ``NON_NULL_FIELDS`` names the keys
    whose columns cannot hold null.
    """

    MUTABLE_FIELDS = {}
    NON_NULL_FIELDS = frozenset({"status"})
    DEFAULT_STATUS = ""

    id = db.Column(db.String(20), primary_key=True, default=fresh_id)
    owner_id = db.Column(db.String(20), nullable=False, index=True)
    status = db.Column(db.String(50), nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )

    def apply_changes(self, changes: dict[str, Any]) -> list[str]:
        """
        Copy allow-listed fields from *changes* onto the record.

        Returns:
            The attribute names that were written.
        """
        applied = []
        for key, attribute in self.MUTABLE_FIELDS.items():
            if key in changes:
                setattr(self, attribute, changes[key])
                applied.append(attribute)
        return applied


class Project(OwnedRecordMixin, db.Model):
    """
    Project owned by a single account.

    Attributes:
        name: Project name.
        description: Optional free text.
        deadline: Caller-supplied date string, stored verbatim.
        status: Free-form status, ``"active"`` at creation.
    """

    __tablename__ = "projects"

    MUTABLE_FIELDS = {
        "name": "name",
        "description": "description",
        "deadline": "deadline",
        "status": "status",
    }
    NON_NULL_FIELDS = frozenset({"name", "status"})
    DEFAULT_STATUS = ProjectStatus.ACTIVE.value

    name: str = db.Column(db.String(200), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    deadline: str | None = db.Column(db.String(64), nullable=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "deadline": self.deadline,
            "status": self.status,
            "ownerId": self.owner_id,
            "createdAt": _to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.name}>"


class Task(OwnedRecordMixin, db.Model):
    """
    Task owned by a single account.

    ``project_id`` is a plain reference: it is not checked against the
    projects table and may point at a deleted or unknown project.

    Attributes:
        title: Task title.
        description: Optional free text.
        project_id: Identifier of the project the client filed it under.
        priority: Free text, usually ``high``, ``medium`` or ``low``.
        due_date: Caller-supplied date string, stored verbatim.
        status: Free-form status, ``"pending"`` at creation.
    """

    __tablename__ = "tasks"

    MUTABLE_FIELDS = {
        "title": "title",
        "description": "description",
        "projectId": "project_id",
        "priority": "priority",
        "dueDate": "due_date",
        "status": "status",
    }
    NON_NULL_FIELDS = frozenset({"title", "status"})
    DEFAULT_STATUS = TaskStatus.PENDING.value

    title: str = db.Column(db.String(200), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    project_id: str | None = db.Column(db.String(20), nullable=True)
    priority: str | None = db.Column(db.String(50), nullable=True, index=True)
    due_date: str | None = db.Column(db.String(64), nullable=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "projectId": self.project_id,
            "priority": self.priority,
            "dueDate": self.due_date,
            "status": self.status,
            "ownerId": self.owner_id,
            "createdAt": _to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"
