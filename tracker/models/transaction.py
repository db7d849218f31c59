# tracker/models/transaction.py
import enum
import uuid

from sqlalchemy import Column, String, ForeignKey, Float, DateTime, Enum, Uuid, Index
from sqlalchemy.orm import relationship

from tracker.core.database import Base
from tracker.models.user import utcnow

UNCATEGORIZED = "uncategorized"
NOTE_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 255
# Keeps per-owner totals finite
AMOUNT_MAX = 1_000_000_000_000


class TransactionType(str, enum.Enum):
    expense = "expense"
    income = "income"


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_owner_date", "owner_id", "date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(length=TITLE_MAX_LENGTH), nullable=False)
    amount = Column(Float, nullable=False)
    type = Column(
        Enum(
            TransactionType,
            name="transaction_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    category = Column(String(length=100), nullable=False, default=UNCATEGORIZED)
    note = Column(String(length=NOTE_MAX_LENGTH), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction {self.type} amount={self.amount} date={self.date} owner_id={self.owner_id}>"
