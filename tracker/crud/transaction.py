# tracker/crud/transaction.py
"""
Owner-scoped access to transactions.

Every statement here filters on ``Transaction.owner_id``; no function looks a
row up by id alone.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import delete, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from tracker.models.transaction import Transaction, TransactionType
from tracker.schemas.transaction import TransactionCreate, TransactionStats

logger = logging.getLogger(__name__)


async def get_transactions_for_owner(owner_id: uuid.UUID, db: AsyncSession) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(Transaction.owner_id == owner_id)
        .order_by(desc(Transaction.date), desc(Transaction.created_at))
    )
    return list(result.scalars().all())


async def get_transaction_for_owner(
    transaction_id: uuid.UUID, owner_id: uuid.UUID, db: AsyncSession
) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.owner_id == owner_id,
        )
    )
    return result.scalar_one_or_none()


async def create_transaction_for_owner(
    owner_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession
) -> Transaction:
    values = tx_in.model_dump()
    if values.get("date") is None:
        values["date"] = datetime.now(timezone.utc)

    new_tx = Transaction(**values, owner_id=owner_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)

    logger.info(f"Transaction {new_tx.id} created for owner {owner_id}")
    return new_tx


async def delete_transaction_for_owner(
    transaction_id: uuid.UUID, owner_id: uuid.UUID, db: AsyncSession
) -> bool:
    """Hard delete. False when no row matched, whether absent or someone else's."""
    result = await db.execute(
        delete(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.owner_id == owner_id,
        )
    )
    await db.commit()

    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Transaction {transaction_id} deleted by owner {owner_id}")
    return deleted


def summarize(transactions: Iterable[Transaction]) -> TransactionStats:
    income = 0.0
    expense = 0.0
    for tx in transactions:
        if tx.type == TransactionType.income:
            income += tx.amount
        else:
            expense += tx.amount
    return TransactionStats(income=income, expense=expense, balance=income - expense)
