"""
Analytics aggregation over the store.

``global_stats`` counts every collection regardless of owner and backs the
public analytics endpoint.  ``user_stats`` summarises one account's tasks.
"""

from __future__ import annotations

from typing import Any

from taskboard.models import TaskPriority, TaskStatus
from taskboard.store import Store


def global_stats(store: Store) -> dict[str, int]:
    return {
        "totalUsers": store.accounts.count(),
        "totalProjects": store.projects.count(),
        "totalTasks": store.tasks.count(),
    }


def user_stats(store: Store, account_id: str) -> dict[str, Any]:
    """
    Summarise the tasks owned by *account_id*.

    Priorities outside high/medium/low (including none at all) still count
    towards ``total`` but are left out of the ``priorities`` breakdown.
    """
    by_priority = store.tasks.priority_counts(account_id)
    total = sum(by_priority.values())
    completed = store.tasks.count_with_status(account_id, TaskStatus.COMPLETED.value)

    return {
        "total": total,
        "completed": completed,
        "remaining": total - completed,
        "priorities": {
            priority.value: by_priority.get(priority.value, 0)
            for priority in (TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW)
        },
    }
