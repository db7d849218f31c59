# tracker/client/views.py
"""
Dashboard views over the transactions held in client state.

All comparisons happen on naive UTC datetimes. Date ranges are whole days:
``start`` counts from the beginning of its day and ``end`` runs to the last
microsecond of its day. When neither is given, ``period`` narrows the list to
today, this week (weeks start on Sunday) or this month.
"""
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from tracker.client.categories import CATEGORY_IDS
from tracker.client.state import Stats

SORT_ORDERS = ("newest", "oldest", "highest", "lowest")
PERIODS = ("All", "Daily", "Weekly", "Monthly")
ALL = "All"

DateLike = Union[datetime, date, str, None]


def _to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _parse_date(value: DateLike) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _to_utc_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not value:
        return None
    try:
        return _to_utc_naive(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
    except ValueError:
        return None


def _start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def _end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def period_start(period: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """First instant covered by a dashboard period tab, None for ``All``."""
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")
    today = _start_of_day(_parse_date(now) if now else _to_utc_naive(datetime.now(timezone.utc)))
    if period == "Daily":
        return today
    if period == "Weekly":
        # weekday() is 0 on Monday
        return today - timedelta(days=(today.weekday() + 1) % 7)
    if period == "Monthly":
        return today.replace(day=1)
    return None


def filter_transactions(
    items: Iterable[Dict[str, Any]],
    search: str = "",
    category: str = ALL,
    type: str = ALL,
    start: DateLike = None,
    end: DateLike = None,
    sort: str = "newest",
    period: str = ALL,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Dashboard view: title search, category/type filters, inclusive date range or period tab, sorting."""
    if sort not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort}")
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")

    needle = search.strip().lower()
    start = _parse_date(start)
    end = _parse_date(end)
    # A custom range overrides the period tab
    if start or end:
        start = start and _start_of_day(start)
        end = end and _end_of_day(end)
    else:
        start = period_start(period, now)

    result = []
    for item in items:
        if needle and needle not in str(item.get("title", "")).lower():
            continue
        if category != ALL and item.get("category") != category:
            continue
        if type != ALL and item.get("type") != type:
            continue
        when = _parse_date(item.get("date"))
        if start and (when is None or when < start):
            continue
        if end and (when is None or when > end):
            continue
        result.append(item)

    if sort in ("newest", "oldest"):
        result.sort(key=lambda i: _parse_date(i.get("date")) or datetime.min, reverse=(sort == "newest"))
    else:
        result.sort(key=lambda i: float(i.get("amount", 0)), reverse=(sort == "highest"))
    return result


def totals(items: Iterable[Dict[str, Any]]) -> Stats:
    stats = Stats()
    for item in items:
        stats = stats.apply(item)
    return stats


def category_breakdown(items: Iterable[Dict[str, Any]]) -> Dict[str, float]:
    """Expense totals per category id, catalogue order first, categories without spend omitted."""
    spent: Dict[str, float] = defaultdict(float)
    for item in items:
        if item.get("type") == "expense":
            spent[item.get("category") or "uncategorized"] += float(item.get("amount", 0))

    ordered = [c for c in CATEGORY_IDS if c in spent]
    ordered += sorted(c for c in spent if c not in CATEGORY_IDS)
    return {name: spent[name] for name in ordered if spent[name] > 0}
