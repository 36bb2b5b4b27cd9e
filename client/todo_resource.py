"""
Infrastructure-as-code style `todo` resource.

Maps create/read/update/delete/import onto ApiClient calls and keeps the
resource state as a flat dict with snake_case keys.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from client.api_client import ApiClient
from client.errors import TodoNotFound

logger = logging.getLogger(__name__)

# state key -> API field
STATE_FIELDS = (
    ("id", "id"),
    ("title", "title"),
    ("description", "description"),
    ("completed", "completed"),
    ("user_id", "userId"),
    ("created_at", "createdAt"),
    ("updated_at", "updatedAt"),
)
STATE_KEYS = tuple(key for key, _ in STATE_FIELDS)


def _to_state(todo: Dict[str, Any]) -> Dict[str, Any]:
    state = {key: todo.get(field) for key, field in STATE_FIELDS}
    state["title"] = state["title"] or ""
    state["description"] = state["description"] or ""
    state["completed"] = bool(state["completed"])
    return state


class TodoResource:
    type_name = "apibasics_todo"

    def __init__(self, client: ApiClient):
        self.client = client

    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        todo = self.client.create_todo(
            plan["title"],
            description=plan.get("description") or "",
            completed=bool(plan.get("completed", False)),
        )
        logger.info("created %s id=%s", self.type_name, todo.get("id"))
        return _to_state(todo)

    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Refresh state from the API. None means the todo is gone and should leave state."""
        try:
            todo = self.client.get_todo(state["id"])
        except TodoNotFound:
            logger.info("%s id=%s no longer exists", self.type_name, state["id"])
            return None
        return _to_state(todo)

    def update(self, state: Dict[str, Any], plan: Dict[str, Any]) -> Dict[str, Any]:
        todo = self.client.update_todo(
            state["id"],
            title=plan.get("title"),
            description=plan.get("description"),
            completed=plan.get("completed"),
        )
        return _to_state(todo)

    def delete(self, state: Dict[str, Any]) -> None:
        self.client.delete_todo(state["id"])
        logger.info("deleted %s id=%s", self.type_name, state["id"])

    def import_state(self, todo_id: str) -> Dict[str, Any]:
        return _to_state(self.client.get_todo(todo_id))
