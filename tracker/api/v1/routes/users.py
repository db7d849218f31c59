# tracker/api/v1/routes/users.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.api.deps import get_current_user
from tracker.core.cookies import clear_access_cookie, set_access_cookie
from tracker.core.database import get_async_session
from tracker.core.security import create_access_token
from tracker.crud.user import authenticate_user, register_user
from tracker.models.user import User
from tracker.schemas.common import ApiResponse, ErrorResponse
from tracker.schemas.user import LoginResult, UserCreate, UserLogin, UserRead

router = APIRouter(
    prefix="/users",
    tags=["User Management"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)


@router.post("/register", response_model=ApiResponse[UserRead], status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Create an account. The password hash is never part of the response."""
    user = await register_user(user_in, db)
    return ApiResponse[UserRead](
        message="User registered successfully.",
        data=UserRead.model_validate(user),
    )


@router.post("/login", response_model=ApiResponse[LoginResult])
async def login(
    login_in: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
):
    """Verify credentials, then hand out the access token as a cookie and in the body."""
    user = await authenticate_user(login_in, db)
    access_token = create_access_token(str(user.id), extra_claims={"email": user.email})
    set_access_cookie(response, access_token)
    return ApiResponse[LoginResult](
        message="Logged in successfully.",
        data=LoginResult(user=UserRead.model_validate(user), access_token=access_token),
    )


@router.post("/logout", response_model=ApiResponse[dict])
async def logout(
    response: Response,
    user: User = Depends(get_current_user),
):
    clear_access_cookie(response)
    return ApiResponse[dict](message="Logged out.", data={})


@router.get("/me", response_model=ApiResponse[UserRead])
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return ApiResponse[UserRead](
        message="User profile fetched successfully.",
        data=UserRead.model_validate(user),
    )
