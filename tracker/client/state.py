# tracker/client/state.py
"""
Application state for a client of the API, updated only through ``reduce``.

Adding or removing a transaction adjusts ``stats`` locally as a running
approximation; loading the list from the server replaces it with the
server's figures.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class Stats:
    income: float = 0.0
    expense: float = 0.0
    balance: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stats":
        return cls(
            income=float(data.get("income", 0)),
            expense=float(data.get("expense", 0)),
            balance=float(data.get("balance", 0)),
        )

    def apply(self, tx: Dict[str, Any], sign: int = 1) -> "Stats":
        amount = float(tx.get("amount", 0)) * sign
        if tx.get("type") == "income":
            return Stats(self.income + amount, self.expense, self.balance + amount)
        return Stats(self.income, self.expense + amount, self.balance - amount)


@dataclass(frozen=True)
class AppState:
    user: Optional[Dict[str, Any]] = None
    items: Tuple[Dict[str, Any], ...] = ()
    stats: Stats = field(default_factory=Stats)
    loading: bool = False
    error: Optional[str] = None


# --- Actions ---

@dataclass(frozen=True)
class RequestStarted:
    pass


@dataclass(frozen=True)
class LoggedIn:
    user: Dict[str, Any]


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class TransactionsLoaded:
    transactions: Tuple[Dict[str, Any], ...]
    stats: Dict[str, Any]


@dataclass(frozen=True)
class TransactionAdded:
    transaction: Dict[str, Any]


@dataclass(frozen=True)
class TransactionRemoved:
    transaction_id: str


@dataclass(frozen=True)
class RequestFailed:
    message: str


Action = Union[
    RequestStarted,
    LoggedIn,
    LoggedOut,
    TransactionsLoaded,
    TransactionAdded,
    TransactionRemoved,
    RequestFailed,
]


def reduce(state: AppState, action: Action) -> AppState:
    if isinstance(action, RequestStarted):
        return replace(state, loading=True, error=None)

    if isinstance(action, LoggedIn):
        return replace(state, user=dict(action.user), loading=False, error=None)

    if isinstance(action, LoggedOut):
        return AppState()

    if isinstance(action, TransactionsLoaded):
        return replace(
            state,
            items=tuple(action.transactions),
            stats=Stats.from_dict(action.stats),
            loading=False,
            error=None,
        )

    if isinstance(action, TransactionAdded):
        tx = action.transaction
        return replace(
            state,
            items=(tx,) + state.items,
            stats=state.stats.apply(tx),
            loading=False,
        )

    if isinstance(action, TransactionRemoved):
        target = next((tx for tx in state.items if tx.get("id") == action.transaction_id), None)
        if target is None:
            return replace(state, loading=False)
        return replace(
            state,
            items=tuple(tx for tx in state.items if tx is not target),
            stats=state.stats.apply(target, sign=-1),
            loading=False,
        )

    if isinstance(action, RequestFailed):
        return replace(state, loading=False, error=action.message)

    raise TypeError(f"Unknown action: {action!r}")
