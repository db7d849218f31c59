# tracker/crud/user.py
import logging
import uuid
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from tracker.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from tracker.core.security import get_password_hash, verify_password
from tracker.models.user import User, normalize_identity
from tracker.schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User with this email or username already exists."


async def get_user_by_id(user_id: uuid.UUID, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_identity(email)))
    return result.scalar_one_or_none()


async def get_user_by_username(username: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == normalize_identity(username)))
    return result.scalar_one_or_none()


async def get_user_by_login(email: Optional[str], username: Optional[str], db: AsyncSession) -> Optional[User]:
    """Email wins when both identifiers are supplied."""
    if email:
        return await get_user_by_email(email, db)
    if username:
        return await get_user_by_username(username, db)
    return None


async def register_user(user_in: UserCreate, db: AsyncSession) -> User:
    username = normalize_identity(user_in.username)
    email = normalize_identity(user_in.email)

    result = await db.execute(
        select(User.id).where(or_(User.username == username, User.email == email))
    )
    if result.first() is not None:
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(user_in.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE)
    await db.refresh(user)

    logger.info(f"User {user.username} registered with id {user.id}")
    return user


async def authenticate_user(login_in: UserLogin, db: AsyncSession) -> User:
    user = await get_user_by_login(login_in.email, login_in.username, db)
    if user is None:
        logger.warning("Login attempt for unknown principal")
        raise NotFoundError("User does not exist.")

    if not verify_password(login_in.password, user.hashed_password):
        logger.warning(f"Password mismatch for user {user.id}")
        raise AuthenticationError("Invalid user credentials.")

    logger.info(f"User {user.id} logged in")
    return user
