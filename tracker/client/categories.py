# tracker/client/categories.py
from typing import NamedTuple, Optional


class Category(NamedTuple):
    id: str
    label: str


# Categories offered by the dashboard, in display order
CATEGORIES = (
    Category("food", "Food & Drinks"),
    Category("medical", "Medical & Doctor"),
    Category("tech", "Tech & SaaS"),
    Category("work", "Work & Shopify"),
    Category("transport", "Transport"),
    Category("rent", "Rent & Bills"),
    Category("shopping", "Shopping"),
    Category("entertainment", "Entertainment"),
    Category("electrics", "Electrics"),
    Category("other", "Miscellaneous"),
)

CATEGORY_IDS = tuple(c.id for c in CATEGORIES)
FALLBACK = "other"

_BY_ID = {c.id: c for c in CATEGORIES}


def get_category(category_id: Optional[str]) -> Category:
    """Catalogue entry for an id; unknown ids and the sentinel fall back to Miscellaneous."""
    return _BY_ID.get(category_id or "", _BY_ID[FALLBACK])
