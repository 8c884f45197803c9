"""Tasks API router: CRUD plus completion and priority endpoints.

Each route is a thin translation to one TaskRepository operation:
- GET /tasks filters on any task field via the query string
- PUT /tasks/{id} merges the JSON body onto the task as-is
- Unknown or non-numeric ids raise TaskNotFound, rendered as 404 by the app
"""

import re
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from pydantic import BaseModel

from verticals.tasks.models.schemas import (
    ErrorMessage,
    PriorityUpdate,
    TaskCreate,
    TaskResponse,
)
from verticals.tasks.repository import TaskRepository, get_task_repository

router = APIRouter()

TASK = {200: {"model": TaskResponse, "description": "Task"}}
NOT_FOUND = {404: {"model": ErrorMessage, "description": "Task not found"}}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def as_object(payload: Any) -> dict[str, Any]:
    """JSON bodies that are not objects carry no fields."""
    return payload if isinstance(payload, dict) else {}


def body_schema(model: type[BaseModel]) -> dict[str, Any]:
    """openapi_extra documenting a loosely-typed JSON body with `model`."""
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
        },
    }


def parse_task_id(raw: str) -> int | None:
    """Parse the leading integer of a path segment ("12abc" -> 12).

    Returns None when there is no leading integer; None matches no task.
    """
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


# ============================================================================
# Collection
# ============================================================================

@router.get(
    "/tasks",
    responses={200: {"model": list[TaskResponse], "description": "List of tasks"}},
)
async def list_tasks(
    request: Request,
    priority: Optional[str] = Query(None, description="Filter tasks by priority"),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Get all tasks with optional filters.

    Every query parameter is a filter clause on the task field of the same
    name; clauses are combined with AND.
    """
    filters = dict(request.query_params)
    return [task.to_dict() for task in repo.list(filters)]


@router.post(
    "/tasks",
    status_code=201,
    responses={201: {"model": TaskResponse, "description": "Task created successfully"}},
    openapi_extra=body_schema(TaskCreate),
)
async def create_task(
    payload: Any = Body(None),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Create a new task."""
    data = TaskCreate.model_validate(as_object(payload))
    task = repo.create(
        title=data.title,
        description=data.description,
        due_date=data.due_date,
        priority=data.priority,
    )
    return task.to_dict()


# ============================================================================
# Single task
# ============================================================================

@router.get("/tasks/{task_id}", responses={**TASK, **NOT_FOUND})
async def get_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Get a task by its ID."""
    return repo.get(parse_task_id(task_id)).to_dict()


@router.put("/tasks/{task_id}", responses={**TASK, **NOT_FOUND})
async def update_task(
    task_id: str,
    updates: Any = Body(None, examples=[{"priority": "low"}]),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Update a task by its ID. Body keys overwrite the same-named fields."""
    return repo.update(parse_task_id(task_id), as_object(updates)).to_dict()


@router.delete("/tasks/{task_id}", status_code=204, responses=NOT_FOUND)
async def delete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Delete a task by its ID."""
    repo.delete(parse_task_id(task_id))


# ============================================================================
# Transitions
# ============================================================================

@router.put("/tasks/{task_id}/complete", responses={**TASK, **NOT_FOUND})
async def complete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Mark a task as complete."""
    return repo.mark_complete(parse_task_id(task_id)).to_dict()


@router.put("/tasks/{task_id}/incomplete", responses={**TASK, **NOT_FOUND})
async def incomplete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Mark a task as incomplete."""
    return repo.mark_incomplete(parse_task_id(task_id)).to_dict()


@router.put(
    "/tasks/{task_id}/priority",
    responses={**TASK, **NOT_FOUND},
    openapi_extra=body_schema(PriorityUpdate),
)
async def change_priority(
    task_id: str,
    payload: Any = Body(None),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Change the priority of a task."""
    priority = PriorityUpdate.model_validate(as_object(payload)).priority
    return repo.set_priority(parse_task_id(task_id), priority).to_dict()
