from fastapi import APIRouter, Depends

from auth.auth_utils import require_admin
from colleges.repository import CollegeRepository
from colleges.routes import get_repository

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats")
def get_dashboard_stats(
    repo: CollegeRepository = Depends(get_repository),
    current_user=Depends(require_admin),
):
    return repo.stats()
