from fastapi import APIRouter

from tracker.api.v1.routes import transactions, users

api_router = APIRouter()

api_router.include_router(users.router)
api_router.include_router(transactions.router)
