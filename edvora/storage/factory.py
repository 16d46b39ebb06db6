import logging

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError

from edvora.core import config
from edvora.database import build_engine
from edvora.storage.base import Storage
from edvora.storage.memory import MemoryStorage
from edvora.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def build_storage(database_url: str | None = None) -> Storage:
    """Pick the backend once for the whole process.

    Without a database URL, or when the database cannot be initialised, the
    in-memory demo backend is used and its data is lost on restart.
    """
    database_url = database_url if database_url is not None else config.DATABASE_URL
    if not database_url:
        logger.warning('DATABASE_URL not set. Using in-memory storage (data lost on restart).')
        return MemoryStorage()

    try:
        storage = SqlStorage(build_engine(database_url))
    except (SQLAlchemyError, ImportError):
        logger.exception('Database initialization failed. Using in-memory storage (data lost on restart).')
        return MemoryStorage()

    logger.info('Connected to database. Data will persist.')
    return storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
