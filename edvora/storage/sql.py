"""Persistent backend on SQLAlchemy.

Every repository call runs in its own session. ``SQLAlchemyError`` never
leaves this module: it is rolled back and re-raised as ``InternalError``.
"""

import copy
from contextlib import contextmanager

from sqlalchemy import or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from edvora.core.errors import DuplicateField, InternalError
from edvora.database import build_session_factory, create_schema
from edvora.models.event import Event
from edvora.models.pomodoro import PomodoroSession
from edvora.models.task import Task
from edvora.models.user import User
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


@contextmanager
def session_scope(session_factory: sessionmaker):
    session = session_factory()
    try:
        yield session
    except SQLAlchemyError as exc:
        session.rollback()
        raise InternalError("Database operation failed") from exc
    finally:
        session.close()


def row_to_dict(row) -> dict:
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


class SqlUserRepository(UserRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, user_id):
        with session_scope(self._session_factory) as session:
            user = session.get(User, user_id)
            return row_to_dict(user) if user else None

    def find_by_identifier(self, identifier):
        with session_scope(self._session_factory) as session:
            user = (
                session.query(User)
                .filter(or_(User.email == identifier, User.username == identifier))
                .first()
            )
            return row_to_dict(user) if user else None

    def find_conflict(self, candidate, exclude_id=None):
        clauses = []
        if candidate.get("username") is not None:
            clauses.append(User.username == candidate["username"])
            clauses.append(User.email == candidate["username"])
        if candidate.get("email") is not None:
            clauses.append(User.email == candidate["email"])
            clauses.append(User.username == candidate["email"])
        if candidate.get("student_id") is not None:
            clauses.append(User.student_id == candidate["student_id"])
        if not clauses:
            return None

        with session_scope(self._session_factory) as session:
            query = session.query(User).filter(or_(*clauses))
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            matches = [row_to_dict(user) for user in query.all()]

        return earliest_conflict(matches, candidate)

    def add(self, record):
        now = utcnow()
        user = User(**{"created_at": now, "updated_at": now, **record, "id": new_id()})
        with session_scope(self._session_factory) as session:
            session.add(user)
            try:
                session.commit()
            except IntegrityError as exc:
                # Lost a race against a concurrent registration.
                session.rollback()
                field = self.find_conflict(record)
                raise DuplicateField(field or "username") from exc
            return row_to_dict(user)

    def update(self, user_id, fields):
        with session_scope(self._session_factory) as session:
            user = session.get(User, user_id)
            if user is None:
                return None
            for key, value in fields.items():
                setattr(user, key, value)
            user.updated_at = utcnow()
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                field = self.find_conflict(fields, exclude_id=user_id)
                raise DuplicateField(field or "username") from exc
            return row_to_dict(user)


class SqlRecordRepository(OwnedRecordRepository):

    def __init__(self, session_factory: sessionmaker, model, defaults: dict, order_by: tuple):
        self._session_factory = session_factory
        self._model = model
        self._defaults = defaults
        self._order_by = order_by

    def _owned(self, session, user_id, record_id):
        return (
            session.query(self._model)
            .filter(self._model.id == record_id, self._model.user_id == user_id)
            .first()
        )

    def list_for_user(self, user_id):
        with session_scope(self._session_factory) as session:
            rows = (
                session.query(self._model)
                .filter(self._model.user_id == user_id)
                .order_by(*self._order_by)
                .all()
            )
            return [row_to_dict(row) for row in rows]

    def get_for_user(self, user_id, record_id):
        with session_scope(self._session_factory) as session:
            row = self._owned(session, user_id, record_id)
            return row_to_dict(row) if row else None

    def create(self, user_id, fields):
        now = utcnow()
        values = {
            **copy.deepcopy(self._defaults),
            **fields,
            "id": new_id(),
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        with session_scope(self._session_factory) as session:
            row = self._model(**values)
            session.add(row)
            session.commit()
            return row_to_dict(row)

    def update(self, user_id, record_id, fields):
        with session_scope(self._session_factory) as session:
            row = self._owned(session, user_id, record_id)
            if row is None:
                return None
            for key, value in fields.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            session.commit()
            return row_to_dict(row)

    def delete(self, user_id, record_id):
        with session_scope(self._session_factory) as session:
            row = self._owned(session, user_id, record_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True


class SqlStorage(Storage):
    mode = "sql"
    description = "SQL Database"
    persistent = True

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            create_schema(engine)
        session_factory = build_session_factory(engine)

        self.users = SqlUserRepository(session_factory)
        self.tasks = SqlRecordRepository(
            session_factory,
            Task,
            TASK_DEFAULTS,
            (Task.deadline.is_(None).desc(), Task.deadline.asc(), Task.created_at.asc()),
        )
        self.events = SqlRecordRepository(
            session_factory,
            Event,
            EVENT_DEFAULTS,
            (Event.date.asc(), Event.start_time.asc(), Event.created_at.asc()),
        )
        self.pomodoro_sessions = SqlRecordRepository(
            session_factory,
            PomodoroSession,
            POMODORO_DEFAULTS,
            (PomodoroSession.completed_at.asc(), PomodoroSession.created_at.asc()),
        )

    def close(self) -> None:
        self.engine.dispose()
