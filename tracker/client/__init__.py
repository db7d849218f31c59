from tracker.client.api import ClientError, TrackerClient
from tracker.client.state import AppState, Stats, reduce
from tracker.client.store import Store

__all__ = ["ClientError", "TrackerClient", "AppState", "Stats", "reduce", "Store"]
