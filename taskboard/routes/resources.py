"""
REST API endpoints for projects and tasks.

Every endpoint requires a bearer token, and every query is scoped to the
authenticated account.  A record owned by another account is reported as
not found, exactly like one that does not exist.

Endpoints:
    GET    /api/projects         - List the caller's projects
    GET    /api/projects/<id>    - Get one project
    POST   /api/projects         - Create a project
    PUT    /api/projects/<id>    - Update allow-listed project fields
    DELETE /api/projects/<id>    - Delete a project
    GET    /api/tasks            - List the caller's tasks
    GET    /api/tasks/<id>       - Get one task
    POST   /api/tasks            - Create a task
    PUT    /api/tasks/<id>       - Update allow-listed task fields
    DELETE /api/tasks/<id>       - Delete a task
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, g, jsonify

from taskboard.auth import require_auth
from taskboard.errors import NotFound
from taskboard.models import Project, Task
from taskboard.store import OwnedStore, get_store
from taskboard.validation import check_field_values, json_body, require_fields

logger = logging.getLogger(__name__)

resources_bp = Blueprint("resources", __name__)


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def _get_owned_or_404(store: OwnedStore, record_id: str):
    """Fetch a record owned by the caller or raise ``NotFound``."""
    record = store.get_owned(g.account_id, record_id)
    if record is None:
        kind = store.model.__name__
        logger.warning("%s %s not found for account %s", kind, record_id, g.account_id)
        raise NotFound(f"{kind} not found")
    return record


# -----------------------------------------------------------------------------
# Projects
# -----------------------------------------------------------------------------

@resources_bp.route("/projects", methods=["GET"])
@require_auth
def list_projects() -> tuple[Response, int]:
    """List the caller's projects in creation order."""
    projects = get_store().projects.list_for_owner(g.account_id)
    return jsonify([project.to_dict() for project in projects]), 200


@resources_bp.route("/projects/<project_id>", methods=["GET"])
@require_auth
def get_project(project_id: str) -> tuple[Response, int]:
    project = _get_owned_or_404(get_store().projects, project_id)
    return jsonify(project.to_dict()), 200


@resources_bp.route("/projects", methods=["POST"])
@require_auth
def create_project() -> tuple[Response, int]:
    """
    Create a project owned by the caller.

    Request Body (JSON):
        name: Project name (required)
        description: Free text (optional)
        deadline: Date string, stored as given (optional)

    Returns:
        201 with the project; ``status`` starts as ``"active"``.
        400 if ``name`` is missing or a field holds a non-string value.
    """
    data = json_body()
    require_fields(data, ["name"])
    check_field_values(Project, data)

    project = get_store().projects.create(g.account_id, data)
    logger.info("Created project %s for account %s", project.id, g.account_id)
    return jsonify(project.to_dict()), 201


@resources_bp.route("/projects/<project_id>", methods=["PUT"])
@require_auth
def update_project(project_id: str) -> tuple[Response, int]:
    """
    Update a project.

    Only ``name``, ``description``, ``deadline`` and ``status`` are applied;
    any other key in the body is ignored.
    Values must be strings, and ``name`` and ``status`` cannot be null.
    """
    store = get_store().projects
    project = _get_owned_or_404(store, project_id)
    data = json_body()
    check_field_values(Project, data)

    store.update(project, data)
    logger.info("Updated project %s", project_id)
    return jsonify(project.to_dict()), 200


@resources_bp.route("/projects/<project_id>", methods=["DELETE"])
@require_auth
def delete_project(project_id: str) -> tuple[Response, int]:
    store = get_store().projects
    project = _get_owned_or_404(store, project_id)

    store.delete(project)
    logger.info("Deleted project %s", project_id)
    return jsonify({"message": "Project deleted"}), 200


# -----------------------------------------------------------------------------
# Tasks
# -----------------------------------------------------------------------------

@resources_bp.route("/tasks", methods=["GET"])
@require_auth
def list_tasks() -> tuple[Response, int]:
    """List the caller's tasks in creation order."""
    tasks = get_store().tasks.list_for_owner(g.account_id)
    return jsonify([task.to_dict() for task in tasks]), 200


@resources_bp.route("/tasks/<task_id>", methods=["GET"])
@require_auth
def get_task(task_id: str) -> tuple[Response, int]:
    task = _get_owned_or_404(get_store().tasks, task_id)
    return jsonify(task.to_dict()), 200


@resources_bp.route("/tasks", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a task owned by the caller.

    Request Body (JSON):
        title: Task title (required)
        description: Free text (optional)
        projectId: Project reference, not checked (optional)
        priority: Usually high, medium or low (optional)
        dueDate: Date string, stored as given (optional)

    Returns:
        201 with the task; ``status`` starts as ``"pending"``.
        400 if ``title`` is missing or a field holds a non-string value.
    """
    data = json_body()
    require_fields(data, ["title"])
    check_field_values(Task, data)

    task = get_store().tasks.create(g.account_id, data)
    logger.info("Created task %s for account %s", task.id, g.account_id)
    return jsonify(task.to_dict()), 201


@resources_bp.route("/tasks/<task_id>", methods=["PUT"])
@require_auth
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update a task.

    Applies ``title``, ``description``, ``projectId``, ``priority``,
    ``dueDate`` and ``status``; other keys are ignored.
    Values must be strings, and ``title`` and ``status`` cannot be null.
    """
    store = get_store().tasks
    task = _get_owned_or_404(store, task_id)
    data = json_body()
    check_field_values(Task, data)

    store.update(task, data)
    logger.info("Updated task %s", task_id)
    return jsonify(task.to_dict()), 200


@resources_bp.route("/tasks/<task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: str) -> tuple[Response, int]:
    store = get_store().tasks
    task = _get_owned_or_404(store, task_id)

    store.delete(task)
    logger.info("Deleted task %s", task_id)
    return jsonify({"message": "Task deleted"}), 200
