"""Authentication service: login, forgot-password and reset-password flows."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.config import get_settings
from app.exceptions import InvalidCredentials, InvalidOrExpiredToken, UserAlreadyExists, UserNotFound
from app.models.user import User
from app.services.notifier import ResetNotifier, get_reset_notifier
from app.services.passwords import PasswordHasher, get_password_hasher
from app.services.tokens import TokenService, get_token_service
from app.services.user_store import UserStore, get_user_store

logger = logging.getLogger("auth_service")


class AuthService:
    """Orchestrates the credential store, hasher, token issuer and reset notifier."""

    def __init__(
        self,
        store: UserStore | None = None,
        hasher: PasswordHasher | None = None,
        tokens: TokenService | None = None,
        notifier: ResetNotifier | None = None,
        frontend_url: str | None = None,
    ) -> None:
        self.store = store or get_user_store()
        self.hasher = hasher or get_password_hasher()
        self.tokens = tokens or get_token_service()
        self.notifier = notifier or get_reset_notifier()
        self.frontend_url = (frontend_url or get_settings().FRONTEND_URL).rstrip("/")

    def register(self, db: Session, email: str, password: str) -> User:
        """Create a user. Raises UserAlreadyExists if the email is taken."""
        if self.store.get_by_email(db, email):
            raise UserAlreadyExists()
        return self.store.create(db, email, self.hasher.hash(password))

    def login(self, db: Session, email: str, password: str) -> str:
        """Verify credentials and return a session token.

        Unknown email and wrong password raise the same InvalidCredentials.
        """
        user = self.store.get_by_email(db, email)
        if not user or not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for %s", email)
            raise InvalidCredentials()

        return self.tokens.create_session_token(user.id)

    def reset_url(self, token: str) -> str:
        """Build the frontend link that carries the reset token."""
        return f"{self.frontend_url}/reset-password?token={token}"

    def request_password_reset(self, db: Session, email: str) -> str:
        """Issue a reset token for the user and email them the reset link.

        The token is committed before the email is sent, so a delivery failure
        (EmailDeliveryError) leaves a valid token the user never received.
        Returns the issued token.
        """
        user = self.store.get_by_email(db, email)
        if not user:
            raise UserNotFound()

        token = self.tokens.create_reset_token()
        expires_at = self.tokens.reset_token_expiry(datetime.utcnow())
        self.store.set_reset_token(db, user, token, expires_at)
        logger.info("Issued password reset token for user %s", user.id)

        self.notifier.send_reset_email(user.email, self.reset_url(token))
        return token

    def reset_password(self, db: Session, token: str, new_password: str) -> None:
        """Set a new password using an unexpired reset token, consuming the token."""
        user = self.store.get_by_valid_reset_token(db, token, datetime.utcnow())
        if not user:
            raise InvalidOrExpiredToken()

        self.store.update_password(db, user, self.hasher.hash(new_password))
        logger.info("Password reset completed for user %s", user.id)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
