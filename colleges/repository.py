import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from colleges.errors import CollegeNotFoundError, DuplicateSlugError, InvalidCollegeError
from colleges.models import CollegeCreate, CollegeDocument, CollegeUpdate, DashboardStats
from colleges.mongo import MongoCorpus
from colleges.pipeline import Page, fee_sort_keys, run_query
from colleges.query import CollegeQuery
from colleges.slug import resolve_slug

logger = logging.getLogger(__name__)

# Stored for sorting only, never returned to clients
INTERNAL_FIELDS = ("feeSort",)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_college(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in doc.items() if k not in INTERNAL_FIELDS}
    if "_id" in out:
        out["_id"] = str(out["_id"])
        out["id"] = out["_id"]
    return out


def build_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a complete college and attach its derived sort fields."""
    try:
        college = CollegeDocument.model_validate(data)
    except ValidationError as exc:
        raise InvalidCollegeError(str(exc)) from exc
    doc = college.model_dump(by_alias=True)
    doc["feeSort"] = fee_sort_keys(doc)
    return doc


class CollegeRepository:
    def __init__(self, db):
        self.collection = db["colleges"]

    # ----------------------------
    # READS
    # ----------------------------
    def search(self, query: CollegeQuery) -> Page:
        page = run_query(MongoCorpus(self.collection), query)
        page.data = [serialize_college(doc) for doc in page.data]
        return page

    def list_all(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
        return [serialize_college(doc) for doc in cursor]

    def get_by_slug(self, slug: str) -> Dict[str, Any]:
        doc = self.collection.find_one({"slug": slug, "status": "published"})
        if not doc:
            raise CollegeNotFoundError(slug)
        return serialize_college(doc)

    def get_by_id(self, college_id: str) -> Dict[str, Any]:
        return serialize_college(self._find(college_id))

    def stats(self) -> Dict[str, int]:
        total_courses = sum(
            len(doc.get("courses") or [])
            for doc in self.collection.find({}, {"courses": 1})
        )
        return DashboardStats(
            total_colleges=self.collection.count_documents({}),
            published=self.collection.count_documents({"status": "published"}),
            drafts=self.collection.count_documents({"status": "draft"}),
            total_courses=total_courses,
        ).model_dump(by_alias=True)

    def filter_options(self) -> Dict[str, List[str]]:
        published = {"status": "published"}
        return {
            "cities": sorted(c for c in self.collection.distinct("city", published) if c),
            "states": sorted(s for s in self.collection.distinct("state", published) if s),
            "types": sorted(t for t in self.collection.distinct("type", published) if t),
        }

    # ----------------------------
    # WRITES
    # ----------------------------
    def create(self, payload: CollegeCreate) -> Dict[str, Any]:
        data = payload.model_dump(by_alias=True)
        data["slug"] = resolve_slug(payload.slug, payload.name)

        now = utcnow()
        data["createdAt"] = now
        data["updatedAt"] = now
        doc = build_document(data)

        self._check_slug_free(doc["slug"])
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Duplicate slug rejected on create", extra={"slug": doc["slug"]})
            raise DuplicateSlugError(doc["slug"])

        logger.info("College created", extra={"college_id": str(result.inserted_id), "slug": doc["slug"]})
        return serialize_college(self.collection.find_one({"_id": result.inserted_id}))

    def update(self, college_id: str, payload: CollegeUpdate) -> Dict[str, Any]:
        current = self._find(college_id)

        merged = {k: v for k, v in current.items() if k != "_id" and k not in INTERNAL_FIELDS}
        merged.update(payload.model_dump(by_alias=True, exclude_unset=True))
        merged["slug"] = resolve_slug(merged.get("slug"), merged.get("name"))
        merged["createdAt"] = current.get("createdAt")
        merged["updatedAt"] = utcnow()
        doc = build_document(merged)

        if doc["slug"] != current.get("slug"):
            self._check_slug_free(doc["slug"], exclude_id=current["_id"])
        try:
            self.collection.replace_one({"_id": current["_id"]}, doc)
        except DuplicateKeyError:
            logger.warning("Duplicate slug rejected on update", extra={"slug": doc["slug"]})
            raise DuplicateSlugError(doc["slug"])

        logger.info("College updated", extra={"college_id": college_id})
        return serialize_college(self.collection.find_one({"_id": current["_id"]}))

    def delete(self, college_id: str) -> None:
        deleted = self.collection.find_one_and_delete({"_id": self._object_id(college_id)})
        if not deleted:
            raise CollegeNotFoundError(college_id)
        logger.info("College deleted", extra={"college_id": college_id})

    def toggle_status(self, college_id: str) -> Dict[str, Any]:
        current = self._find(college_id)
        status = "draft" if current.get("status") == "published" else "published"

        self.collection.update_one(
            {"_id": current["_id"]},
            {"$set": {"status": status, "updatedAt": utcnow()}}
        )
        logger.info("College status toggled", extra={"college_id": college_id, "status": status})
        return serialize_college(self.collection.find_one({"_id": current["_id"]}))

    # ----------------------------
    # HELPERS
    # ----------------------------
    def _object_id(self, college_id: str) -> ObjectId:
        try:
            return ObjectId(college_id)
        except (InvalidId, TypeError):
            logger.warning("Invalid college id requested", extra={"college_id": college_id})
            raise CollegeNotFoundError(college_id)

    def _find(self, college_id: str) -> Dict[str, Any]:
        doc = self.collection.find_one({"_id": self._object_id(college_id)})
        if not doc:
            raise CollegeNotFoundError(college_id)
        return doc

    def _check_slug_free(self, slug: str, exclude_id=None) -> None:
        query: Dict[str, Any] = {"slug": slug}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        if self.collection.find_one(query):
            logger.warning("Duplicate slug rejected", extra={"slug": slug})
            raise DuplicateSlugError(slug)
