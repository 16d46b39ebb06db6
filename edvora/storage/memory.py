"""In-memory demo backend.

Data lives in lists owned by a single ``MemoryStorage`` instance and is lost on
restart. Writers are not serialized against each other.
"""

import copy

from edvora.storage.base import (
    EVENT_DEFAULTS,
    POMODORO_DEFAULTS,
    TASK_DEFAULTS,
    OwnedRecordRepository,
    Storage,
    UserRepository,
    earliest_conflict,
    new_id,
    utcnow,
)


class MemoryUserRepository(UserRepository):

    def __init__(self):
        self._users: list[dict] = []

    def get(self, user_id):
        for user in self._users:
            if user["id"] == user_id:
                return copy.deepcopy(user)
        return None

    def find_by_identifier(self, identifier):
        for user in self._users:
            if user["email"] == identifier or user["username"] == identifier:
                return copy.deepcopy(user)
        return None

    def find_conflict(self, candidate, exclude_id=None):
        others = (user for user in self._users if user["id"] != exclude_id)
        return earliest_conflict(others, candidate)

    def add(self, record):
        now = utcnow()
        user = {"created_at": now, "updated_at": now, **record, "id": new_id()}
        self._users.append(user)
        return copy.deepcopy(user)

    def update(self, user_id, fields):
        for user in self._users:
            if user["id"] == user_id:
                user.update(fields)
                user["updated_at"] = utcnow()
                return copy.deepcopy(user)
        return None


class MemoryRecordRepository(OwnedRecordRepository):

    def __init__(self, defaults: dict | None = None):
        self._records: list[dict] = []
        self._defaults = defaults or {}

    def _find(self, user_id, record_id):
        for record in self._records:
            if record["id"] == record_id and record["user_id"] == user_id:
                return record
        return None

    def list_for_user(self, user_id):
        return [copy.deepcopy(record) for record in self._records if record["user_id"] == user_id]

    def get_for_user(self, user_id, record_id):
        record = self._find(user_id, record_id)
        return copy.deepcopy(record) if record else None

    def create(self, user_id, fields):
        now = utcnow()
        record = {
            **copy.deepcopy(self._defaults),
            **copy.deepcopy(fields),
            "id": new_id(),
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        self._records.append(record)
        return copy.deepcopy(record)

    def update(self, user_id, record_id, fields):
        record = self._find(user_id, record_id)
        if record is None:
            return None
        record.update(copy.deepcopy(fields))
        record["updated_at"] = utcnow()
        return copy.deepcopy(record)

    def delete(self, user_id, record_id):
        record = self._find(user_id, record_id)
        if record is None:
            return False
        self._records.remove(record)
        return True


class MemoryStorage(Storage):
    mode = "memory"
    description = "In-Memory (Demo Mode)"
    persistent = False

    def __init__(self):
        self.users = MemoryUserRepository()
        self.tasks = MemoryRecordRepository(TASK_DEFAULTS)
        self.events = MemoryRecordRepository(EVENT_DEFAULTS)
        self.pomodoro_sessions = MemoryRecordRepository(POMODORO_DEFAULTS)
