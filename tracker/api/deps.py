# tracker/api/deps.py
import logging
import uuid

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.cookies import extract_token
from tracker.core.database import get_async_session
from tracker.core.exceptions import AuthenticationError
from tracker.core.security import TokenStatus, verify_access_token
from tracker.crud.user import get_user_by_id
from tracker.models.user import User

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Missing credentials. Log in first."
INVALID_TOKEN = "Invalid token."
SESSION_EXPIRED = "Session expired. Log in again."
PRINCIPAL_MISSING = "Principal no longer exists."


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Authentication gate for every owner-scoped route:
    - no token in cookie or Authorization header -> 401
    - bad signature or malformed token -> 401
    - correctly signed but expired token -> 401 with its own message
    - token for a user that no longer exists -> 401
    Otherwise the user is returned and stored on ``request.state.user``.
    """
    token = extract_token(request)
    if not token:
        logger.info(f"Rejected {request.method} {request.url.path}: no credentials")
        raise AuthenticationError(MISSING_CREDENTIALS)

    verification = verify_access_token(token)
    if verification.status is TokenStatus.EXPIRED:
        logger.info(f"Rejected {request.method} {request.url.path}: token expired")
        raise AuthenticationError(SESSION_EXPIRED)
    if verification.status is not TokenStatus.VALID:
        logger.info(f"Rejected {request.method} {request.url.path}: invalid token")
        raise AuthenticationError(INVALID_TOKEN)

    try:
        user_id = uuid.UUID(verification.subject)
    except (TypeError, ValueError):
        logger.info(f"Rejected {request.method} {request.url.path}: malformed subject")
        raise AuthenticationError(INVALID_TOKEN)

    user = await get_user_by_id(user_id, db)
    if user is None:
        logger.info(f"Rejected {request.method} {request.url.path}: principal {user_id} missing")
        raise AuthenticationError(PRINCIPAL_MISSING)

    request.state.user = user
    return user
