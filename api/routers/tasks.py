"""
Tasks router - HTTP endpoints for task management
"""
from fastapi import APIRouter, status, Depends
from fastapi.responses import JSONResponse
from typing import Any, Optional
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError
from api.dependencies import get_task_store, parse_task_id
from api.errors import TITLE_REQUIRED_MESSAGE, error_response, success_body
from api.services.task_store import MAX_TITLE_LENGTH, Task, TaskStore
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tasks", tags=["tasks"])

TITLE_TOO_LONG_MESSAGE = f"Task title must be less than {MAX_TITLE_LENGTH} characters"


# Pydantic models for request validation
class CreateTaskRequest(BaseModel):
    title: str

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("title_required", TITLE_REQUIRED_MESSAGE)
        if len(value.strip()) > MAX_TITLE_LENGTH:
            raise PydanticCustomError("title_too_long", TITLE_TOO_LONG_MESSAGE)
        return value.strip()


class UpdateTaskRequest(BaseModel):
    title: Optional[str] = None
    completed: Optional[bool] = None

    # Only runs for fields present in the body, explicit nulls included
    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("title_invalid", "Title must be a non-empty string")
        if len(value.strip()) > MAX_TITLE_LENGTH:
            raise PydanticCustomError("title_too_long", TITLE_TOO_LONG_MESSAGE)
        return value.strip()

    @field_validator("completed", mode="before")
    @classmethod
    def check_completed(cls, value: Any) -> bool:
        if not isinstance(value, bool):
            raise PydanticCustomError("completed_invalid", "Completed must be a boolean value")
        return value


def serialize_task(task: Task) -> dict:
    return task.model_dump(mode="json", by_alias=True)


def invalid_id_response() -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid task ID")


def not_found_response() -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Task not found")


# Get tasks endpoints
@router.get("")
@router.get("/", include_in_schema=False)
async def get_tasks_endpoint(store: TaskStore = Depends(get_task_store)):
    """Get all tasks in insertion order"""
    tasks = store.list_tasks()
    logger.info(f"📋 Fetched {len(tasks)} tasks")
    return success_body([serialize_task(task) for task in tasks], count=len(tasks))


@router.get("/{task_id}")
@router.get("/{task_id}/", include_in_schema=False)
async def get_task_endpoint(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Get a single task"""
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return invalid_id_response()

    task = store.get_task(parsed_id)
    if task is None:
        return not_found_response()

    return success_body(serialize_task(task))


# Create task endpoint
@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_task_endpoint(
    request: CreateTaskRequest,
    store: TaskStore = Depends(get_task_store)
):
    """Create a new task"""
    logger.info(f"➕ Creating task: {request.title}")
    task = store.create_task(request.title)
    logger.info(f"✅ Created task {task.id}")
    return success_body(serialize_task(task), message="Task created successfully")


# Update task endpoint
@router.put("/{task_id}")
@router.put("/{task_id}/", include_in_schema=False)
async def update_task_endpoint(
    task_id: str,
    request: Optional[UpdateTaskRequest] = None,
    store: TaskStore = Depends(get_task_store)
):
    """
    Update a task's title and/or completion flag.
    Fields left out of the body keep their current values.
    """
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return invalid_id_response()

    request = request or UpdateTaskRequest()
    logger.info(f"✏️ Updating task {parsed_id}")
    task = store.update_task(
        parsed_id,
        title=request.title,
        completed=request.completed
    )
    if task is None:
        return not_found_response()

    logger.info(f"✅ Updated task {parsed_id}")
    return success_body(serialize_task(task), message="Task updated successfully")


# Delete task endpoint
@router.delete("/{task_id}")
@router.delete("/{task_id}/", include_in_schema=False)
async def delete_task_endpoint(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Delete a task"""
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return invalid_id_response()

    logger.info(f"🗑️ Deleting task {parsed_id}")
    if not store.delete_task(parsed_id):
        return not_found_response()

    logger.info(f"✅ Deleted task {parsed_id}")
    return success_body(message="Task deleted successfully")
