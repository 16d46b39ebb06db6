"""User model definitions."""

from sqlalchemy import Column, DateTime, String

from edvora.database import Base


class User(Base):
    """Represents a registered account."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    student_id = Column(String, unique=True, nullable=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    department = Column(String)
    bio = Column(String)
    phone = Column(String)
    avatar = Column(String)
    role = Column(String, nullable=False, default="student")  # student/admin/employer
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
