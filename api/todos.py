from __future__ import annotations

from flask import Blueprint, request, g, abort

from api.formatters import format_response
from models import storage
from models.todo import Todo
from models.schemas.todo import TodoCreateSchema, TodoUpdateSchema, TodoOutSchema
from utils.decorators import jwt_required, valid_uuid_param

bp = Blueprint("todos", __name__)

# Schemas
todo_create_schema = TodoCreateSchema()
todo_update_schema = TodoUpdateSchema()
todo_out_schema = TodoOutSchema()
todos_out_schema = TodoOutSchema(many=True)

INVALID_TODO_ID = "Invalid todo ID format"


def get_owned_todo(todo_id: str) -> Todo:
    """
    Fetch a todo by id AND owner. A todo owned by someone else is reported
    exactly like a missing one.
    """
    session = storage.get_session()
    todo = (
        session.query(Todo)
        .filter(Todo.id == todo_id, Todo.user_id == g.current_user_id)
        .first()
    )
    if not todo:
        abort(404, description="Todo not found")
    return todo


@bp.get("/todos")
@jwt_required()
def list_todos():
    """
    List the authenticated account's todos
    ---
    tags:
      - Todos
    security:
      - Bearer: []
    responses:
      200:
        description: List of todos
      401:
        description: Unauthorized
    """
    session = storage.get_session()
    rows = (
        session.query(Todo)
        .filter(Todo.user_id == g.current_user_id)
        .order_by(Todo.created_at.asc())
        .all()
    )
    return format_response(todos_out_schema.dump(rows), 200)


@bp.post("/todos")
@jwt_required()
def create_todo():
    """
    Create a new todo
    ---
    tags:
      - Todos
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [title]
          properties:
            title: { type: string, maxLength: 255 }
            description: { type: string }
            completed: { type: boolean, default: false }
    responses:
      201:
        description: Created
      400:
        description: Missing required field title
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = todo_create_schema.load(payload)

    todo = Todo(
        user_id=g.current_user_id,
        title=data["title"],
        description=data.get("description") or "",
        completed=data.get("completed", False),
    )
    storage.new(todo)
    storage.save()

    return format_response(
        {"success": True, "message": "Todo created successfully", "todo": todo_out_schema.dump(todo)},
        201,
    )


@bp.get("/todos/<todo_id>")
@jwt_required()
@valid_uuid_param("todo_id", INVALID_TODO_ID)
def get_todo(todo_id: str):
    """
    Get a single todo by id
    ---
    tags:
      - Todos
    security:
      - Bearer: []
    parameters:
      - in: path
        name: todo_id
        type: string
        format: uuid
        required: true
    responses:
      200:
        description: Todo found
      400:
        description: Invalid todo ID format
      404:
        description: Not found (or owned by another account)
    """
    return format_response(todo_out_schema.dump(get_owned_todo(todo_id)), 200)


@bp.put("/todos/<todo_id>")
@jwt_required()
@valid_uuid_param("todo_id", INVALID_TODO_ID)
def update_todo(todo_id: str):
    """
    Update a todo (partial)
    ---
    tags:
      - Todos
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: path
        name: todo_id
        type: string
        format: uuid
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            title: { type: string }
            description: { type: string }
            completed: { type: boolean }
    responses:
      200:
        description: Updated
      400:
        description: Invalid todo ID format or body
      404:
        description: Not found
    """
    todo = get_owned_todo(todo_id)

    payload = request.get_json(silent=True) or {}
    data = todo_update_schema.load(payload)

    for field in ["title", "description", "completed"]:
        if field in data:
            setattr(todo, field, data[field])
    todo.touch()

    storage.new(todo)
    storage.save()
    return format_response(
        {"success": True, "message": "Todo updated successfully", "todo": todo_out_schema.dump(todo)},
        200,
    )


@bp.delete("/todos/<todo_id>")
@jwt_required()
@valid_uuid_param("todo_id", INVALID_TODO_ID)
def delete_todo(todo_id: str):
    """
    Delete a todo
    ---
    tags:
      - Todos
    security:
      - Bearer: []
    parameters:
      - in: path
        name: todo_id
        type: string
        format: uuid
        required: true
    responses:
      200:
        description: Deleted
      400:
        description: Invalid todo ID format
      404:
        description: Not found
    """
    todo = get_owned_todo(todo_id)
    storage.delete(todo)
    storage.save()
    return format_response({"success": True, "message": "Todo deleted successfully"}, 200)
