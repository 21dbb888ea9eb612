import logging
from contextlib import contextmanager
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status

from taskhub.core.errors import NotFoundError, TaskAPIError, UnexpectedError, ValidationError
from taskhub.core.security import TokenService
from taskhub.dependencies import get_store, get_token_service
from taskhub.models.task import REQUIRED_FIELDS
from taskhub.schemas.task import ErrorResponse, MessageResponse, TaskCreated, TaskPayload, TaskResponse
from taskhub.store.ports import TaskStore

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing required fields"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}
NOT_FOUND_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Task not found"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}

# POST /task issues tokens, so it never sits behind the token gate.
router = APIRouter(tags=["tasks"])

records_router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses=NOT_FOUND_RESPONSES,
)

@contextmanager
def handler_errors(action: str):
    """Turn any failure that is not already an API error into a 500."""
    try:
        yield
    except TaskAPIError:
        raise
    except Exception as e:
        logger.exception("Error %s", action)
        raise UnexpectedError(str(e)) from e

def required_fields(payload: Optional[TaskPayload]) -> Dict[str, str]:
    if payload is None:
        raise ValidationError()
    fields = payload.model_dump(include=set(REQUIRED_FIELDS))
    if not all(fields.get(name) for name in REQUIRED_FIELDS):
        raise ValidationError()
    return fields

@router.post(
    "/task",
    status_code=status.HTTP_201_CREATED,
    response_model=TaskCreated,
    responses=ERROR_RESPONSES,
)
async def create_task(
    payload: Optional[TaskPayload] = None,
    store: TaskStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    with handler_errors("creating task"):
        fields = required_fields(payload)
        task = await store.insert(fields)
        token = tokens.issue(task.id)
        logger.info("Created task %s", task.id)
        return TaskCreated(task=TaskResponse.model_validate(task), token=token)

@records_router.get("", response_model=List[TaskResponse])
async def list_tasks(store: TaskStore = Depends(get_store)):
    with handler_errors("listing tasks"):
        tasks = await store.find()
        return [TaskResponse.model_validate(task) for task in tasks]

@records_router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    with handler_errors(f"fetching task {task_id}"):
        task = await store.find_by_id(task_id)
        if task is None:
            logger.info("Task %s not found", task_id)
            raise NotFoundError()
        return TaskResponse.model_validate(task)

@records_router.put("/{task_id}", response_model=TaskResponse, responses=ERROR_RESPONSES)
async def update_task(
    task_id: str,
    payload: Optional[TaskPayload] = None,
    store: TaskStore = Depends(get_store),
):
    with handler_errors(f"updating task {task_id}"):
        fields = required_fields(payload)
        task = await store.find_and_update(task_id, fields)
        if task is None:
            logger.info("Task %s not found", task_id)
            raise NotFoundError()
        logger.info("Updated task %s", task_id)
        return TaskResponse.model_validate(task)

@records_router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    with handler_errors(f"deleting task {task_id}"):
        task = await store.find_and_delete(task_id)
        if task is None:
            logger.info("Task %s not found", task_id)
            raise NotFoundError()
        logger.info("Deleted task %s", task_id)
        return MessageResponse(message="Task deleted successfully")
