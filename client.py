"""HTTP client for the college discovery API, plus an offline mock.

The auth token is passed in explicitly; nothing is read from globals or
the environment. ``MockCollegeApiClient`` serves the college and dashboard
calls from an in-memory list using the same listing pipeline as the
server, so both return the same pages for the same data.
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from colleges.errors import InvalidCollegeError
from colleges.models import CollegeCreate, CollegeDocument, CollegeUpdate
from colleges.pipeline import InMemoryCorpus, run_query
from colleges.query import normalize_query, public_view
from colleges.slug import resolve_slug

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def list_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Encode listing parameters the way the server expects them."""
    out: Dict[str, Any] = {}
    if params.get("search"):
        out["search"] = params["search"]
    for key in ("city", "type"):
        if params.get(key):
            value = params[key]
            out[key] = value if isinstance(value, str) else ",".join(value)
    for key in ("minFee", "maxFee"):
        if params.get(key) is not None:
            out[key] = str(params[key])
    for key in ("sort", "page", "limit"):
        if params.get(key):
            out[key] = str(params[key])
    return out


class CollegeApiClient:
    def __init__(self, base_url: str, token: Optional[str] = None, session=None, timeout: float = 15):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def with_token(self, token: str) -> "CollegeApiClient":
        return CollegeApiClient(self.base_url, token=token, session=self.session, timeout=self.timeout)

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        res = self.session.request(
            method,
            f"{self.base_url}{endpoint}",
            headers=headers,
            timeout=self.timeout,
            **kwargs,
        )
        if res.status_code >= 400:
            try:
                message = res.json().get("detail") or "Request failed"
            except ValueError:
                message = "Request failed"
            logger.warning("API request failed", extra={"endpoint": endpoint, "status_code": res.status_code})
            raise ApiError(res.status_code, str(message))
        return res.json()

    # ---- AUTH ----
    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def signup(self, name: str, email: str, password: str, role: str = "student") -> Dict[str, Any]:
        return self._request("POST", "/auth/signup", json={
            "name": name, "email": email, "password": password, "role": role,
        })

    # ---- COLLEGES (Public) ----
    def get_colleges(self, **params) -> Dict[str, Any]:
        return self._request("GET", "/colleges", params=list_params(params))

    def get_college_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        try:
            return self._request("GET", f"/colleges/{slug}")
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise

    # ---- COLLEGES (Admin) ----
    def get_all_colleges_admin(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/colleges/admin/all")

    def get_college_by_id(self, college_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self._request("GET", f"/colleges/admin/{college_id}")
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise

    def create_college(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/colleges", json=data)

    def update_college(self, college_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/colleges/{college_id}", json=data)

    def delete_college(self, college_id: str) -> None:
        self._request("DELETE", f"/colleges/{college_id}")

    def toggle_college_status(self, college_id: str) -> Dict[str, Any]:
        return self._request("PATCH", f"/colleges/{college_id}/status")

    # ---- DASHBOARD ----
    def get_dashboard_stats(self) -> Dict[str, int]:
        return self._request("GET", "/dashboard/stats")


class MockCollegeApiClient:
    """Offline stand-in for ``CollegeApiClient`` over fixture colleges."""

    def __init__(self, colleges: List[Dict[str, Any]]):
        self.colleges = [copy.deepcopy(c) for c in colleges]

    def _find(self, college_id: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.colleges if c.get("id") == college_id), None)

    def get_colleges(self, **params) -> Dict[str, Any]:
        query = public_view(normalize_query(params))
        return run_query(InMemoryCorpus(self.colleges), query).to_dict()

    def get_college_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        return next(
            (c for c in self.colleges if c.get("slug") == slug and c.get("status") == "published"),
            None,
        )

    def get_all_colleges_admin(self) -> List[Dict[str, Any]]:
        return list(self.colleges)

    def get_college_by_id(self, college_id: str) -> Optional[Dict[str, Any]]:
        return self._find(college_id)

    # Same rules as CollegeRepository: 422 for a bad body, 400 for a bad
    # slug, a slug clash or a merged document that fails validation
    def _parse(self, model, data: Dict[str, Any], **dump_options) -> Dict[str, Any]:
        try:
            return model.model_validate(data).model_dump(by_alias=True, **dump_options)
        except ValidationError as exc:
            raise ApiError(422, str(exc)) from exc

    def _complete(self, college: Dict[str, Any], exclude_id: Optional[str] = None) -> Dict[str, Any]:
        try:
            college["slug"] = resolve_slug(college.get("slug"), college.get("name"))
            doc = CollegeDocument.model_validate(college).model_dump(by_alias=True)
        except InvalidCollegeError as exc:
            raise ApiError(400, str(exc)) from exc
        except ValidationError as exc:
            raise ApiError(400, str(exc)) from exc
        if any(c.get("slug") == doc["slug"] and c.get("id") != exclude_id for c in self.colleges):
            raise ApiError(400, "College with this slug already exists")
        return doc

    def create_college(self, data: Dict[str, Any]) -> Dict[str, Any]:
        college = self._parse(CollegeCreate, data)
        now = datetime.now(timezone.utc)
        college.update(createdAt=now, updatedAt=now)

        doc = self._complete(college)
        doc["id"] = uuid.uuid4().hex
        self.colleges.append(doc)
        return doc

    def update_college(self, college_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        college = self._find(college_id)
        if college is None:
            raise ApiError(404, "College not found")
        changes = self._parse(CollegeUpdate, data, exclude_unset=True)

        merged = {k: v for k, v in college.items() if k != "id"}
        merged.update(changes)
        merged["createdAt"] = college.get("createdAt")
        merged["updatedAt"] = datetime.now(timezone.utc)

        doc = self._complete(merged, exclude_id=college_id)
        college.update(doc)
        return college

    def delete_college(self, college_id: str) -> None:
        college = self._find(college_id)
        if college is None:
            raise ApiError(404, "College not found")
        self.colleges.remove(college)

    def toggle_college_status(self, college_id: str) -> Dict[str, Any]:
        college = self._find(college_id)
        if college is None:
            raise ApiError(404, "College not found")
        college["status"] = "draft" if college.get("status") == "published" else "published"
        college["updatedAt"] = datetime.now(timezone.utc)
        return college

    def get_dashboard_stats(self) -> Dict[str, int]:
        return {
            "totalColleges": len(self.colleges),
            "published": sum(1 for c in self.colleges if c.get("status") == "published"),
            "drafts": sum(1 for c in self.colleges if c.get("status") == "draft"),
            "totalCourses": sum(len(c.get("courses") or []) for c in self.colleges),
        }
