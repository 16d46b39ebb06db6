"""Pomodoro session model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from edvora.database import Base


class PomodoroSession(Base):
    """Represents a finished focus session."""
    __tablename__ = "pomodoro_sessions"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    duration = Column(Integer, nullable=False, default=25)
    task_name = Column(String, default="Focus Session")
    completed_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
