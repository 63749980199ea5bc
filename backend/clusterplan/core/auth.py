"""Authentication dependency for FastAPI.

Validates bearer session ids against the auth_sessions table.
When AUTH_REQUIRED=false, returns a dev user without checking headers.

The resolved UserInfo is passed explicitly to the services that need a
caller identity; nothing reads it from ambient state.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clusterplan.core.config import get_settings
from clusterplan.core.database import get_session
from clusterplan.core.logging import get_logger
from clusterplan.models.organization import AppUser, AuthSession

logger = get_logger(__name__)


@dataclass
class UserInfo:
    """Authenticated user information."""

    id: str
    email: str
    name: str


DEV_USER = UserInfo(id="dev-user", email="dev@localhost", name="Dev User")


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


async def get_current_user(
    request: Request, db: AsyncSession = Depends(get_session)
) -> UserInfo:
    """FastAPI dependency that validates the session id and returns the current user.

    When AUTH_REQUIRED=false, returns a dev user without checking headers.
    When AUTH_REQUIRED=true, validates the Bearer session id against auth_sessions.
    """
    settings = get_settings()

    if not settings.auth_required:
        return DEV_USER

    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    session_id = auth_header[7:]  # Strip "Bearer " prefix

    result = await db.execute(
        select(AuthSession.expires_at, AppUser.user_id, AppUser.email, AppUser.name)
        .join(AppUser, AuthSession.user_id == AppUser.user_id)
        .where(AuthSession.id == session_id)
    )
    row = result.first()

    if row is None:
        logger.warning("Session not found: %s...", session_id[:8])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session not found",
        )

    if _as_aware(row.expires_at) < datetime.now(UTC):
        logger.warning("Session expired at %s", row.expires_at)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired",
        )

    return UserInfo(id=row.user_id, email=row.email or "", name=row.name or "")
