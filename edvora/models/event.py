"""Calendar event model definitions."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, String

from edvora.database import Base


class Event(Base):
    """Represents a calendar entry."""
    __tablename__ = "events"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, default="")
    date = Column(Date, nullable=False)
    start_time = Column(String)
    end_time = Column(String)
    type = Column(String, default="class")
    color = Column(String, default="#667eea")
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
