"""College listing pipeline: filter, sort and paginate over a corpus.

The semantics live here once. A corpus adapter only knows how to apply a
list of predicates, order by a ``SortSpec``, count and slice; predicates
know how to test an in-memory document and how to express themselves as a
MongoDB filter, so both adapters return the same page for the same input.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from colleges.query import CollegeQuery

ASCENDING = 1
DESCENDING = -1


def get_path(doc: Dict[str, Any], path: str, default: Any = None) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return default
        value = value[part]
    return value


def course_fees(doc: Dict[str, Any]) -> List[float]:
    return [
        course["fees"]
        for course in doc.get("courses") or []
        if isinstance(course.get("fees"), (int, float))
    ]


def min_course_fee(doc: Dict[str, Any]) -> Optional[float]:
    fees = course_fees(doc)
    return min(fees) if fees else None


def fee_sort_keys(doc: Dict[str, Any]) -> Dict[str, float]:
    """Derived sort fields for the fee sorts.

    A college without courses has no minimum fee; it sorts last for both
    ``fees-low`` (+inf ascending) and ``fees-high`` (-inf descending).
    """
    cheapest = min_course_fee(doc)
    if cheapest is None:
        return {"low": math.inf, "high": -math.inf}
    return {"low": cheapest, "high": cheapest}


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class Predicate:
    def matches(self, doc: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def to_mongo(self) -> Dict[str, Any]:
        raise NotImplementedError


class PublishedOnly(Predicate):
    def matches(self, doc):
        return doc.get("status") == "published"

    def to_mongo(self):
        return {"status": "published"}


@dataclass(frozen=True)
class SearchText(Predicate):
    """Case-insensitive substring of name, city or state."""

    term: str

    def matches(self, doc):
        needle = self.term.lower()
        return any(
            needle in (doc.get(field) or "").lower()
            for field in ("name", "city", "state")
        )

    def to_mongo(self):
        pattern = re.escape(self.term)
        return {"$or": [
            {field: {"$regex": pattern, "$options": "i"}}
            for field in ("name", "city", "state")
        ]}


@dataclass(frozen=True)
class CityIn(Predicate):
    """City equals any of ``cities``, ignoring case."""

    cities: Sequence[str]

    def matches(self, doc):
        city = (doc.get("city") or "").lower()
        return any(city == wanted.lower() for wanted in self.cities)

    def to_mongo(self):
        return {"$or": [
            {"city": {"$regex": f"^{re.escape(city)}$", "$options": "i"}}
            for city in self.cities
        ]}


@dataclass(frozen=True)
class TypeIn(Predicate):
    types: Sequence[str]

    def matches(self, doc):
        return doc.get("type") in self.types

    def to_mongo(self):
        return {"type": {"$in": list(self.types)}}


@dataclass(frozen=True)
class HasCourseFeeAtLeast(Predicate):
    amount: float

    def matches(self, doc):
        return any(fee >= self.amount for fee in course_fees(doc))

    def to_mongo(self):
        return {"courses.fees": {"$gte": self.amount}}


@dataclass(frozen=True)
class HasCourseFeeAtMost(Predicate):
    amount: float

    def matches(self, doc):
        return any(fee <= self.amount for fee in course_fees(doc))

    def to_mongo(self):
        return {"courses.fees": {"$lte": self.amount}}


def build_predicates(query: CollegeQuery) -> List[Predicate]:
    """Translate a descriptor into the conjunction of active predicates.

    The two fee bounds are separate existence checks: a college passes
    ``minFee`` if any course costs at least that much and ``maxFee`` if any
    course costs at most that much, not necessarily the same course.
    """
    predicates: List[Predicate] = []
    if query.published_only:
        predicates.append(PublishedOnly())
    if query.search:
        predicates.append(SearchText(query.search))
    if query.cities:
        predicates.append(CityIn(query.cities))
    if query.types:
        predicates.append(TypeIn(query.types))
    if query.min_fee is not None:
        predicates.append(HasCourseFeeAtLeast(query.min_fee))
    if query.max_fee is not None:
        predicates.append(HasCourseFeeAtMost(query.max_fee))
    return predicates


def mongo_filter(predicates: Sequence[Predicate]) -> Dict[str, Any]:
    if not predicates:
        return {}
    return {"$and": [p.to_mongo() for p in predicates]}


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: int


SORTS = {
    "ranking": SortSpec("ranking", ASCENDING),
    "rating": SortSpec("rating", DESCENDING),
    "fees-low": SortSpec("feeSort.low", ASCENDING),
    "fees-high": SortSpec("feeSort.high", DESCENDING),
    "placement": SortSpec("placement.percentage", DESCENDING),
}


def resolve_sort(key: str) -> SortSpec:
    return SORTS.get(key, SORTS["ranking"])


def sort_value(doc: Dict[str, Any], spec: SortSpec) -> float:
    if spec.field.startswith("feeSort."):
        return fee_sort_keys(doc)[spec.field.split(".", 1)[1]]
    value = get_path(doc, spec.field)
    return value if isinstance(value, (int, float)) else 0


# ---------------------------------------------------------------------------
# Corpus adapters
# ---------------------------------------------------------------------------


class Corpus(Protocol):
    def filter(self, predicates: Sequence[Predicate]) -> "Corpus": ...

    def order(self, spec: SortSpec) -> "Corpus": ...

    def count(self) -> int: ...

    def slice(self, skip: int, limit: int) -> List[Dict[str, Any]]: ...


class InMemoryCorpus:
    """A corpus over a list of college dicts; list order is the tie-break."""

    def __init__(self, docs: Sequence[Dict[str, Any]]):
        self._docs = list(docs)

    def filter(self, predicates):
        return InMemoryCorpus(
            [d for d in self._docs if all(p.matches(d) for p in predicates)]
        )

    def order(self, spec):
        # sorted() is stable, and stays stable with reverse=True
        return InMemoryCorpus(sorted(
            self._docs,
            key=lambda d: sort_value(d, spec),
            reverse=spec.direction == DESCENDING,
        ))

    def count(self):
        return len(self._docs)

    def slice(self, skip, limit):
        return self._docs[skip:skip + limit]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


@dataclass
class Page:
    data: List[Dict[str, Any]]
    total: int
    page: int
    total_pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
        }


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def run_query(corpus: Corpus, query: CollegeQuery) -> Page:
    """Filter, sort and slice ``corpus`` according to ``query``.

    Never raises for a normalized query: an empty result or a page past the
    end yields ``data == []`` with accurate ``total`` and ``total_pages``.
    """
    matched = corpus.filter(build_predicates(query))
    total = matched.count()
    if query.skip >= total:
        data = []
    else:
        data = matched.order(resolve_sort(query.sort)).slice(query.skip, query.limit)
    return Page(
        data=data,
        total=total,
        page=query.page,
        total_pages=total_pages(total, query.limit),
    )
