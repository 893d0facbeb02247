"""Normalization of raw listing parameters into a ``CollegeQuery``.

The normalizer is total: any input, however malformed, produces a usable
descriptor. Bad values fall back to the defaults below instead of raising.
"""

import math
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple

SORT_KEYS = ("ranking", "rating", "fees-low", "fees-high", "placement")

DEFAULT_SORT = "ranking"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6

# page and limit stay below this so skip always fits a BSON int64
MAX_PAGING_VALUE = 2 ** 31 - 1


@dataclass(frozen=True)
class CollegeQuery:
    search: Optional[str] = None
    cities: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    min_fee: Optional[float] = None
    max_fee: Optional[float] = None
    sort: str = DEFAULT_SORT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    published_only: bool = True

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def public_view(query: CollegeQuery) -> CollegeQuery:
    """Catalog, search and detail-by-slug: published colleges only."""
    return replace(query, published_only=True)


def admin_view(query: CollegeQuery) -> CollegeQuery:
    """Admin console: every status is visible."""
    return replace(query, published_only=False)


def _split_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    items = []
    for raw in value:
        if not isinstance(raw, str):
            continue
        for part in raw.split(","):
            part = part.strip()
            if part:
                items.append(part)
    return tuple(items)


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    return min(number, MAX_PAGING_VALUE)


def _fee_bound(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def normalize_query(params: Mapping[str, Any]) -> CollegeQuery:
    """Build a public ``CollegeQuery`` from loosely typed parameters.

    ``params`` uses the wire names: ``search``, ``city``, ``type``,
    ``minFee``, ``maxFee``, ``sort``, ``page`` and ``limit``. List filters
    accept a list of strings or a comma-separated string; an empty list
    means "no filter".
    """
    search = params.get("search")
    search = search.strip() if isinstance(search, str) else ""

    sort = params.get("sort")
    if sort not in SORT_KEYS:
        sort = DEFAULT_SORT

    return CollegeQuery(
        search=search or None,
        cities=_split_list(params.get("city")),
        types=_split_list(params.get("type")),
        min_fee=_fee_bound(params.get("minFee")),
        max_fee=_fee_bound(params.get("maxFee")),
        sort=sort,
        page=_positive_int(params.get("page"), DEFAULT_PAGE),
        limit=_positive_int(params.get("limit"), DEFAULT_LIMIT),
    )
