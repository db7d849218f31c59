# tracker/schemas/transaction.py
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from tracker.models.transaction import (
    AMOUNT_MAX,
    NOTE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    UNCATEGORIZED,
    TransactionType,
)
from tracker.schemas.common import CamelModel


class TransactionCreate(CamelModel):
    """Allow-list of client-settable fields; ownership is never one of them."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="E.g. Coffee at the corner shop")
    # Strict: JSON booleans and numeric strings are not amounts
    amount: float = Field(..., gt=0, le=AMOUNT_MAX, allow_inf_nan=False, strict=True)
    type: TransactionType
    category: Optional[str] = Field(default=UNCATEGORIZED, max_length=100)
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)
    # The web client posts the effective date as "createdAt"
    date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("date", "createdAt"),
        description="ISO 8601 effective date; defaults to now",
    )

    @field_validator("category", mode="after")
    @classmethod
    def default_category(cls, value: Optional[str]) -> str:
        return value or UNCATEGORIZED

    @field_validator("note", mode="after")
    @classmethod
    def empty_note_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class TransactionRead(CamelModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    amount: float
    type: TransactionType
    category: str
    note: Optional[str] = None
    date: datetime
    created_at: datetime
    updated_at: datetime


class TransactionStats(CamelModel):
    income: float = 0.0
    expense: float = 0.0
    balance: float = 0.0


class TransactionList(CamelModel):
    transactions: List[TransactionRead]
    stats: TransactionStats
