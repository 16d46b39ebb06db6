import datetime as dt
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field, field_validator

from edvora.auth.dependencies import get_current_user_id
from edvora.schemas import CamelModel, MessageResponse, partial_fields
from edvora.services.records import EventService
from edvora.storage.base import Storage
from edvora.storage.factory import get_storage

router = APIRouter(tags=['events'])

EventType = Literal['class', 'meeting', 'study', 'exam', 'personal', 'deadline', 'other']

TIME_OF_DAY_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'
COLOR_PATTERN = r'^#[0-9a-fA-F]{6}$'
NULLABLE_EVENT_FIELDS = frozenset({'description', 'start_time', 'end_time'})


class EventCreateRequest(CamelModel):
    title: str = Field(max_length=200)
    description: str | None = None
    date: dt.date
    start_time: str | None = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    type: EventType | None = None
    color: str | None = Field(default=None, pattern=COLOR_PATTERN)

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            raise ValueError('Title is required.')
        return normalized


class EventUpdateRequest(EventCreateRequest):
    title: str | None = Field(default=None, max_length=200)
    date: dt.date | None = None


class EventResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: str | None = None
    date: dt.date
    start_time: str | None = None
    end_time: str | None = None
    type: str
    color: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class EventEnvelope(CamelModel):
    success: bool = True
    event: EventResponse


class EventListEnvelope(CamelModel):
    success: bool = True
    events: list[EventResponse]


def get_event_service(storage: Storage = Depends(get_storage)) -> EventService:
    return EventService(storage.events)


@router.get('', response_model=EventListEnvelope)
def list_events(
    month: str | None = Query(default=None, pattern=r'^\d{4}-(0[1-9]|1[0-2])$'),
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    events = service.list_for_user(user_id)
    if month:
        events = [event for event in events if event['date'].strftime('%Y-%m') == month]
    return {'events': events}


@router.post('', response_model=EventEnvelope, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    return {'event': service.create(user_id, partial_fields(payload))}


@router.put('/{event_id}', response_model=EventEnvelope)
def update_event(
    event_id: str,
    payload: EventUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    fields = partial_fields(payload, nullable=NULLABLE_EVENT_FIELDS)
    return {'event': service.update(user_id, event_id, fields)}


@router.delete('/{event_id}', response_model=MessageResponse)
def delete_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    service.delete(user_id, event_id)
    return {'message': 'Event deleted successfully'}
