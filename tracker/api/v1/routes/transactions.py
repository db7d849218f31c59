# tracker/api/v1/routes/transactions.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.api.deps import get_current_user
from tracker.core.database import get_async_session
from tracker.core.exceptions import NotFoundError
from tracker.crud.transaction import (
    create_transaction_for_owner,
    delete_transaction_for_owner,
    get_transaction_for_owner,
    get_transactions_for_owner,
    summarize,
)
from tracker.models.user import User
from tracker.schemas.common import ApiResponse, ErrorResponse
from tracker.schemas.transaction import TransactionCreate, TransactionList, TransactionRead

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

TRANSACTION_NOT_FOUND = "Transaction not found."


def _parse_transaction_id(raw: str) -> uuid.UUID:
    # A malformed id cannot belong to the caller either
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise NotFoundError(TRANSACTION_NOT_FOUND)


@router.get("", response_model=ApiResponse[TransactionList])
async def read_transactions(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    transactions = await get_transactions_for_owner(user.id, db)
    return ApiResponse[TransactionList](
        message="Data fetched.",
        data=TransactionList(
            transactions=[TransactionRead.model_validate(tx) for tx in transactions],
            stats=summarize(transactions),
        ),
    )


@router.post("", response_model=ApiResponse[TransactionRead], status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await create_transaction_for_owner(user.id, tx_in, db)
    return ApiResponse[TransactionRead](
        message="Transaction recorded.",
        data=TransactionRead.model_validate(tx),
    )


@router.get("/{transaction_id}", response_model=ApiResponse[TransactionRead])
async def read_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_for_owner(_parse_transaction_id(transaction_id), user.id, db)
    if tx is None:
        raise NotFoundError(TRANSACTION_NOT_FOUND)
    return ApiResponse[TransactionRead](message="Transaction fetched.", data=TransactionRead.model_validate(tx))


@router.delete("/{transaction_id}", response_model=ApiResponse[dict])
async def delete_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    deleted = await delete_transaction_for_owner(_parse_transaction_id(transaction_id), user.id, db)
    if not deleted:
        raise NotFoundError(TRANSACTION_NOT_FOUND)
    return ApiResponse[dict](message="Transaction deleted.", data={})
