"""Resource Access Layer: ownership-scoped operations on per-user records."""

from edvora.core.errors import NotFound
from edvora.storage.base import OwnedRecordRepository


class RecordService:
    """Wraps a repository and turns misses into ``NotFound``.

    A record that exists but belongs to another user is reported with the same
    error as one that does not exist at all.
    """

    label = "Record"

    def __init__(self, repository: OwnedRecordRepository):
        self.repository = repository

    def not_found(self) -> NotFound:
        return NotFound(f"{self.label} not found")

    def list_for_user(self, user_id: str) -> list[dict]:
        return self.repository.list_for_user(user_id)

    def get(self, user_id: str, record_id: str) -> dict:
        record = self.repository.get_for_user(user_id, record_id)
        if record is None:
            raise self.not_found()
        return record

    def create(self, user_id: str, fields: dict) -> dict:
        return self.repository.create(user_id, fields)

    def update(self, user_id: str, record_id: str, fields: dict) -> dict:
        record = self.repository.update(user_id, record_id, fields)
        if record is None:
            raise self.not_found()
        return record

    def delete(self, user_id: str, record_id: str) -> None:
        if not self.repository.delete(user_id, record_id):
            raise self.not_found()


def reconcile_completion(fields: dict, current: dict | None = None) -> dict:
    """Keep ``completed`` in line with ``status``, which wins on conflict."""
    fields = dict(fields)
    if fields.get("status") is not None:
        fields["completed"] = fields["status"] == "completed"
    elif fields.get("completed") is not None:
        current_status = (current or {}).get("status", "pending")
        if fields["completed"]:
            fields["status"] = "completed"
        elif current_status == "completed":
            fields["status"] = "pending"
    return fields


class TaskService(RecordService):
    label = "Task"

    def create(self, user_id, fields):
        return super().create(user_id, reconcile_completion(fields))

    def update(self, user_id, record_id, fields):
        current = self.get(user_id, record_id)
        return super().update(user_id, record_id, reconcile_completion(fields, current))


class EventService(RecordService):
    label = "Event"


class PomodoroService(RecordService):
    label = "Session"
