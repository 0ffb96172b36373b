"""Credential store: queries and updates against the users table."""

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import InternalError
from app.models.user import User

logger = logging.getLogger("auth_service")


class UserStore:
    """Reads and writes user records. Database failures surface as InternalError."""

    def get_by_email(self, db: Session, email: str) -> User | None:
        """Find a user by exact email match."""
        try:
            return db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as exc:
            logger.exception("User lookup by email failed")
            raise InternalError() from exc

    def get_by_valid_reset_token(self, db: Session, token: str, now: datetime) -> User | None:
        """Find the user holding this reset token, provided it expires after ``now``."""
        try:
            return (
                db.query(User)
                .filter(User.reset_token == token, User.reset_token_expires_at > now)
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("User lookup by reset token failed")
            raise InternalError() from exc

    def create(self, db: Session, email: str, password_hash: str) -> User:
        try:
            user = User(email=email, password_hash=password_hash)
            db.add(user)
            db.commit()
            db.refresh(user)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Creating user failed")
            raise InternalError() from exc
        return user

    def set_reset_token(self, db: Session, user: User, token: str, expires_at: datetime) -> None:
        """Persist a reset token and its expiry together."""
        try:
            user.reset_token = token
            user.reset_token_expires_at = expires_at
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Storing reset token failed")
            raise InternalError() from exc

    def update_password(self, db: Session, user: User, password_hash: str) -> None:
        """Store a new password hash and clear any reset token in one commit."""
        try:
            user.password_hash = password_hash
            user.reset_token = None
            user.reset_token_expires_at = None
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Updating password failed")
            raise InternalError("Failed to update password") from exc


_user_store: UserStore | None = None


def get_user_store() -> UserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = UserStore()
    return _user_store
