import random

from fastapi import APIRouter, Depends

from edvora.auth.dependencies import get_current_user_id
from edvora.schemas import CamelModel
from edvora.services.stats import task_stats
from edvora.storage.base import Storage
from edvora.storage.factory import get_storage

router = APIRouter(tags=['stats'])

QUOTES = (
    "The future belongs to those who believe in the beauty of their dreams. - Eleanor Roosevelt",
    "Don't watch the clock; do what it does. Keep going. - Sam Levenson",
    "The only way to do great work is to love what you do. - Steve Jobs",
    "Believe you can and you're halfway there. - Theodore Roosevelt",
    "It does not matter how slowly you go as long as you do not stop. - Confucius",
    "Your time is limited, don't waste it living someone else's life. - Steve Jobs",
)


class TaskStatsResponse(CamelModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    completion_rate: int


class StatsEnvelope(CamelModel):
    success: bool = True
    stats: TaskStatsResponse


class QuoteResponse(CamelModel):
    success: bool = True
    quote: str


@router.get('/stats', response_model=StatsEnvelope)
def get_stats(
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    return {'stats': task_stats(storage.tasks.list_for_user(user_id))}


@router.get('/quote', response_model=QuoteResponse)
def get_quote():
    return {'quote': random.choice(QUOTES)}
