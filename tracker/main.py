# tracker/main.py
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.api.errors import register_exception_handlers
from tracker.api.v1.api import api_router
from tracker.core.config import settings
from tracker.core.database import create_db_and_tables, get_async_session
from tracker.core.exceptions import ApiError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


class ServiceUnavailableError(ApiError):
    status_code = 503
    default_message = "Service unhealthy"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup (migrations are handled by Alembic in deployment)"""
    await create_db_and_tables()
    logger.info("Database tables ready")
    logger.info(f"Allowed CORS origins: {settings.cors_origins}")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "User Management", "description": "Registration, login and session"},
        {"name": "transactions", "description": "Income and expense records of the current user"},
    ],
)

# Cookies only cross origins when credentials are allowed for an explicit origin list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
)

register_exception_handlers(app)

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "success": True,
        "message": f"{settings.APP_NAME} is running!",
        "data": {"version": settings.VERSION},
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_async_session)):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise ServiceUnavailableError()
    return {
        "success": True,
        "message": "healthy",
        "data": {"version": settings.VERSION, "environment": settings.ENVIRONMENT},
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("tracker.main:app", host="0.0.0.0", port=port, reload=False)
