"""Task model definitions."""

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, String

from edvora.database import Base


class Task(Base):
    """Represents an assignment, project or exam tracked by a student."""
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String)
    course = Column(String)
    type = Column(String, default="assignment")
    priority = Column(String, default="medium")
    deadline = Column(Date, nullable=True)
    status = Column(String, default="pending")
    completed = Column(Boolean, default=False)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
