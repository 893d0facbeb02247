from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from auth.auth_utils import get_current_user, require_admin
from colleges.errors import CollegeNotFoundError, DuplicateSlugError, InvalidCollegeError
from colleges.models import CollegeCreate, CollegeUpdate
from colleges.query import normalize_query, public_view
from colleges.repository import CollegeRepository
from database import get_database

router = APIRouter(prefix="/colleges", tags=["Colleges"])


def get_repository(db=Depends(get_database)) -> CollegeRepository:
    return CollegeRepository(db)


# ----------------------------
# PUBLIC LISTING (MAIN API)
# ----------------------------
# Every parameter arrives as a raw string; normalize_query coerces bad
# values to defaults instead of rejecting the request.
@router.get("")
def get_colleges(
    search: Optional[str] = None,
    city: Optional[List[str]] = Query(None),
    type: Optional[List[str]] = Query(None),
    minFee: Optional[str] = None,
    maxFee: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    repo: CollegeRepository = Depends(get_repository),
):
    query = public_view(normalize_query({
        "search": search,
        "city": city,
        "type": type,
        "minFee": minFee,
        "maxFee": maxFee,
        "sort": sort,
        "page": page,
        "limit": limit,
    }))
    return repo.search(query).to_dict()


# ----------------------------
# FILTER METADATA
# ----------------------------
@router.get("/filters")
def get_filters(repo: CollegeRepository = Depends(get_repository)):
    return repo.filter_options()


# ----------------------------
# ADMIN LISTING / DETAIL
# ----------------------------
@router.get("/admin/all")
def get_all_colleges_admin(
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(require_admin),
):
    return repo.list_all()


@router.get("/admin/{college_id}")
def get_college_by_id(
    college_id: str,
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(get_current_user),
):
    try:
        return repo.get_by_id(college_id)
    except CollegeNotFoundError:
        raise HTTPException(status_code=404, detail="College not found")


# ----------------------------
# PUBLIC DETAIL
# ----------------------------
@router.get("/{slug}")
def get_college_by_slug(slug: str, repo: CollegeRepository = Depends(get_repository)):
    try:
        return repo.get_by_slug(slug)
    except CollegeNotFoundError:
        raise HTTPException(status_code=404, detail="College not found")


# ----------------------------
# CREATE / UPDATE / DELETE
# ----------------------------
@router.post("", status_code=201)
def create_college(
    payload: CollegeCreate,
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(require_admin),
):
    try:
        return repo.create(payload)
    except DuplicateSlugError:
        raise HTTPException(status_code=400, detail="College with this slug already exists")
    except InvalidCollegeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.put("/{college_id}")
def update_college(
    college_id: str,
    payload: CollegeUpdate,
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(require_admin),
):
    try:
        return repo.update(college_id, payload)
    except CollegeNotFoundError:
        raise HTTPException(status_code=404, detail="College not found")
    except DuplicateSlugError:
        raise HTTPException(status_code=400, detail="College with this slug already exists")
    except InvalidCollegeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.delete("/{college_id}")
def delete_college(
    college_id: str,
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(require_admin),
):
    try:
        repo.delete(college_id)
    except CollegeNotFoundError:
        raise HTTPException(status_code=404, detail="College not found")
    return {"message": "College deleted successfully"}


# ----------------------------
# TOGGLE STATUS
# ----------------------------
@router.patch("/{college_id}/status")
def toggle_college_status(
    college_id: str,
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(require_admin),
):
    try:
        return repo.toggle_status(college_id)
    except CollegeNotFoundError:
        raise HTTPException(status_code=404, detail="College not found")
