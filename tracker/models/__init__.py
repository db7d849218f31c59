from tracker.models.user import User
from tracker.models.transaction import Transaction, TransactionType, UNCATEGORIZED

__all__ = ["User", "Transaction", "TransactionType", "UNCATEGORIZED"]
