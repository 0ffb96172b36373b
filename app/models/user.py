"""User model."""

from sqlalchemy import Column, DateTime, Integer, String

from app.database import Base


class User(Base):
    """Registered user and any outstanding password reset."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)
    reset_token = Column(String(64), nullable=True, index=True)
    reset_token_expires_at = Column(DateTime, nullable=True)
