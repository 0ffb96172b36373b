"""Session and password reset token issuing.

Session tokens are HS256 JWTs carrying the user id and verifiable with the
shared secret alone. Reset tokens are opaque random hex strings with no
claims; they are only meaningful when looked up in the users table.
"""

import secrets
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.config import get_settings

RESET_TOKEN_BYTES = 32


class TokenService:
    """Creates and validates session tokens and generates reset tokens."""

    def __init__(self) -> None:
        settings = get_settings()
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.session_expire_minutes = settings.JWT_EXPIRE_MINUTES
        self.reset_expire_minutes = settings.RESET_TOKEN_EXPIRE_MINUTES

    def create_session_token(self, user_id: int) -> str:
        """Create a signed session token for the given user."""
        now = datetime.utcnow()
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.session_expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_session_token(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a session token. Returns None if invalid or expired."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def create_reset_token(self) -> str:
        """Generate a 64 character hex reset token."""
        return secrets.token_hex(RESET_TOKEN_BYTES)

    def reset_token_expiry(self, issued_at: datetime) -> datetime:
        """Return when a reset token issued at ``issued_at`` stops being accepted."""
        return issued_at + timedelta(minutes=self.reset_expire_minutes)


_token_service: TokenService | None = None


def get_token_service() -> TokenService:
    """Get singleton token service instance."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service
