from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from pydantic import Field

from edvora.auth.dependencies import get_current_user_id
from edvora.schemas import CamelModel, partial_fields
from edvora.services.records import PomodoroService
from edvora.services.stats import pomodoro_stats
from edvora.storage.base import Storage
from edvora.storage.factory import get_storage

router = APIRouter(tags=['pomodoro'])

MAX_SESSION_MINUTES = 240


class SessionCreateRequest(CamelModel):
    duration: int | None = Field(default=None, gt=0, le=MAX_SESSION_MINUTES)
    task_name: str | None = Field(default=None, max_length=200)
    completed_at: datetime | None = None


class SessionResponse(CamelModel):
    id: str
    user_id: str
    duration: int
    task_name: str
    completed_at: datetime | None = None
    created_at: datetime | None = None


class SessionEnvelope(CamelModel):
    success: bool = True
    session: SessionResponse


class SessionListEnvelope(CamelModel):
    success: bool = True
    sessions: list[SessionResponse]


class PomodoroStatsResponse(CamelModel):
    total_sessions: int
    total_minutes: int
    today_sessions: int
    today_minutes: int


class PomodoroStatsEnvelope(CamelModel):
    success: bool = True
    stats: PomodoroStatsResponse


def get_pomodoro_service(storage: Storage = Depends(get_storage)) -> PomodoroService:
    return PomodoroService(storage.pomodoro_sessions)


@router.post('/sessions', response_model=SessionEnvelope, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: SessionCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PomodoroService = Depends(get_pomodoro_service),
):
    fields = partial_fields(payload)
    if isinstance(fields.get('task_name'), str):
        fields['task_name'] = fields['task_name'].strip() or 'Focus Session'
    fields.setdefault('completed_at', datetime.now(timezone.utc))
    return {'session': service.create(user_id, fields)}


@router.get('/sessions', response_model=SessionListEnvelope)
def list_sessions(
    user_id: str = Depends(get_current_user_id),
    service: PomodoroService = Depends(get_pomodoro_service),
):
    return {'sessions': service.list_for_user(user_id)}


@router.get('/stats', response_model=PomodoroStatsEnvelope)
def get_pomodoro_stats(
    user_id: str = Depends(get_current_user_id),
    service: PomodoroService = Depends(get_pomodoro_service),
):
    today = datetime.now(timezone.utc).date()
    return {'stats': pomodoro_stats(service.list_for_user(user_id), today)}
