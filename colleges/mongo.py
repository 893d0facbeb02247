"""MongoDB corpus adapter for the listing pipeline."""

from typing import Any, Dict, List, Optional, Sequence

from pymongo import ASCENDING

from colleges.pipeline import Predicate, SortSpec, mongo_filter


class MongoCorpus:
    """Translates pipeline steps into a single ``find`` on a collection.

    Ties are broken on ``_id`` ascending, which follows insertion order the
    same way list order does for ``InMemoryCorpus``.
    """

    def __init__(
        self,
        collection,
        predicates: Sequence[Predicate] = (),
        spec: Optional[SortSpec] = None,
    ):
        self.collection = collection
        self.predicates = list(predicates)
        self.spec = spec

    @property
    def query(self) -> Dict[str, Any]:
        return mongo_filter(self.predicates)

    @property
    def sort(self) -> List[tuple]:
        keys = []
        if self.spec is not None:
            keys.append((self.spec.field, self.spec.direction))
        keys.append(("_id", ASCENDING))
        return keys

    def filter(self, predicates):
        return MongoCorpus(self.collection, self.predicates + list(predicates), self.spec)

    def order(self, spec):
        return MongoCorpus(self.collection, self.predicates, spec)

    def count(self):
        return self.collection.count_documents(self.query)

    def slice(self, skip, limit):
        cursor = self.collection.find(self.query).sort(self.sort).skip(skip).limit(limit)
        return list(cursor)
