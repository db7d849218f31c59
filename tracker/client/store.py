# tracker/client/store.py
import logging
from typing import Any, Callable, List, Optional

from tracker.client.api import ClientError, TrackerClient
from tracker.client.state import (
    Action,
    AppState,
    LoggedIn,
    LoggedOut,
    RequestFailed,
    RequestStarted,
    TransactionAdded,
    TransactionRemoved,
    TransactionsLoaded,
    reduce,
)

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class Store:
    """Holds the current AppState; every change goes through ``dispatch``."""

    def __init__(self, client: TrackerClient, state: Optional[AppState] = None):
        self.client = client
        self._state = state or AppState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def dispatch(self, action: Action) -> AppState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    async def _run(self, call, on_success: Callable[[Any], Action]) -> bool:
        self.dispatch(RequestStarted())
        try:
            result = await call
        except ClientError as e:
            self.dispatch(RequestFailed(e.message))
            return False
        self.dispatch(on_success(result))
        return True

    async def login(self, password: str, email: Optional[str] = None, username: Optional[str] = None) -> bool:
        return await self._run(
            self.client.login(password, email=email, username=username),
            lambda data: LoggedIn(data["user"]),
        )

    async def check_auth(self) -> bool:
        """Restore the session from the cookie jar, if it is still accepted."""
        self.dispatch(RequestStarted())
        try:
            user = await self.client.me()
        except ClientError:
            self.dispatch(LoggedOut())
            return False
        self.dispatch(LoggedIn(user))
        return True

    async def logout(self) -> bool:
        return await self._run(self.client.logout(), lambda _: LoggedOut())

    async def fetch_transactions(self) -> bool:
        return await self._run(
            self.client.list_transactions(),
            lambda data: TransactionsLoaded(tuple(data["transactions"]), data["stats"]),
        )

    async def add_transaction(self, **fields: Any) -> bool:
        return await self._run(self.client.add_transaction(**fields), TransactionAdded)

    async def remove_transaction(self, transaction_id: str) -> bool:
        return await self._run(
            self.client.delete_transaction(transaction_id),
            lambda _: TransactionRemoved(transaction_id),
        )
