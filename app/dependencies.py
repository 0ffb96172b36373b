"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import HTTPException, Request

from app.services.tokens import get_token_service


@dataclass
class CurrentUser:
    """Identity carried by a verified session token."""

    user_id: int


def get_current_user(request: Request) -> CurrentUser:
    """Validate the Bearer session token without touching the database. Raises 401 if invalid."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = get_token_service().decode_session_token(auth_header[7:])
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return CurrentUser(user_id=int(payload["sub"]))
