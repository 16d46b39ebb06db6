"""Storage port shared by the persistent and in-memory backends.

Records cross this boundary as plain dicts keyed by snake_case field names.
User records include ``password_hash``; stripping it is the caller's job.

The two backends are interchangeable except for list ordering: the SQL
backend sorts by each collection's natural key, the in-memory backend keeps
insertion order.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

UNIQUE_USER_FIELDS = ("username", "email", "student_id")

# Client-facing names of the unique user fields, in conflict-report order.
UNIQUE_FIELD_LABELS = {
    "username": "username",
    "email": "email",
    "student_id": "studentId",
}

LOGIN_IDENTIFIER_TWINS = {"username": "email", "email": "username"}

TASK_DEFAULTS = {
    "description": None,
    "course": None,
    "type": "assignment",
    "priority": "medium",
    "deadline": None,
    "status": "pending",
    "completed": False,
    "tags": [],
}

EVENT_DEFAULTS = {
    "description": "",
    "start_time": None,
    "end_time": None,
    "type": "class",
    "color": "#667eea",
}

POMODORO_DEFAULTS = {
    "duration": 25,
    "task_name": "Focus Session",
    "completed_at": None,
}


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def first_conflict(existing: dict, candidate: dict) -> str | None:
    """Return the first unique field ``candidate`` shares with ``existing``.

    Login accepts either identifier, so a username also collides with another
    user's email and the other way round.
    """
    for field in UNIQUE_USER_FIELDS:
        value = candidate.get(field)
        if value is None:
            continue
        if existing.get(field) == value or existing.get(LOGIN_IDENTIFIER_TWINS.get(field)) == value:
            return UNIQUE_FIELD_LABELS[field]
    return None


def earliest_conflict(existing_users, candidate: dict) -> str | None:
    """Across all ``existing_users``, report username before email before studentId."""
    conflicts = {first_conflict(existing, candidate) for existing in existing_users}
    for field in UNIQUE_FIELD_LABELS.values():
        if field in conflicts:
            return field
    return None


class UserRepository(ABC):

    @abstractmethod
    def get(self, user_id: str) -> dict | None:
        ...

    @abstractmethod
    def find_by_identifier(self, identifier: str) -> dict | None:
        """Look a user up by username or email."""

    @abstractmethod
    def find_conflict(self, candidate: dict, exclude_id: str | None = None) -> str | None:
        """Name the first of username/email/studentId already taken, if any."""

    @abstractmethod
    def add(self, record: dict) -> dict:
        ...

    @abstractmethod
    def update(self, user_id: str, fields: dict) -> dict | None:
        ...


class OwnedRecordRepository(ABC):
    """Per-user CRUD where every lookup is scoped to the owner.

    A record owned by someone else is reported exactly like a missing one.
    """

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[dict]:
        ...

    @abstractmethod
    def get_for_user(self, user_id: str, record_id: str) -> dict | None:
        ...

    @abstractmethod
    def create(self, user_id: str, fields: dict) -> dict:
        ...

    @abstractmethod
    def update(self, user_id: str, record_id: str, fields: dict) -> dict | None:
        ...

    @abstractmethod
    def delete(self, user_id: str, record_id: str) -> bool:
        ...


class Storage(ABC):
    """Bundle of repositories selected once at startup."""

    mode: str
    description: str
    persistent: bool

    users: UserRepository
    tasks: OwnedRecordRepository
    events: OwnedRecordRepository
    pomodoro_sessions: OwnedRecordRepository

    def close(self) -> None:
        return None
