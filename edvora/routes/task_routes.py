from datetime import date, datetime
from typing import Literal

from fastapi import APIRouter, Depends, status
from pydantic import Field, field_validator

from edvora.auth.dependencies import get_current_user_id
from edvora.schemas import CamelModel, MessageResponse, partial_fields
from edvora.services.records import TaskService
from edvora.storage.base import Storage
from edvora.storage.factory import get_storage

router = APIRouter(tags=['tasks'])

TaskType = Literal['assignment', 'project', 'exam', 'other']
TaskPriority = Literal['low', 'medium', 'high']
TaskStatus = Literal['pending', 'in-progress', 'completed', 'overdue']

NULLABLE_TASK_FIELDS = frozenset({'description', 'course', 'deadline'})


class TaskCreateRequest(CamelModel):
    title: str = Field(max_length=200)
    description: str | None = None
    course: str | None = None
    type: TaskType | None = None
    priority: TaskPriority | None = None
    deadline: date | None = None
    status: TaskStatus | None = None
    completed: bool | None = None
    tags: list[str] | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            raise ValueError('Title is required.')
        return normalized

    @field_validator('deadline', mode='before')
    @classmethod
    def blank_deadline_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TaskUpdateRequest(TaskCreateRequest):
    title: str | None = Field(default=None, max_length=200)


class TaskResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: str | None = None
    course: str | None = None
    type: str
    priority: str
    deadline: date | None = None
    status: str
    completed: bool
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskEnvelope(CamelModel):
    success: bool = True
    task: TaskResponse


class TaskListEnvelope(CamelModel):
    success: bool = True
    tasks: list[TaskResponse]


def get_task_service(storage: Storage = Depends(get_storage)) -> TaskService:
    return TaskService(storage.tasks)


@router.get('', response_model=TaskListEnvelope)
def list_tasks(
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    return {'tasks': service.list_for_user(user_id)}


@router.post('', response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    return {'task': service.create(user_id, partial_fields(payload))}


@router.put('/{task_id}', response_model=TaskEnvelope)
def update_task(
    task_id: str,
    payload: TaskUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    fields = partial_fields(payload, nullable=NULLABLE_TASK_FIELDS)
    return {'task': service.update(user_id, task_id, fields)}


@router.delete('/{task_id}', response_model=MessageResponse)
def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    service.delete(user_id, task_id)
    return {'message': 'Task deleted successfully'}
