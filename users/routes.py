from fastapi import APIRouter, Depends

from auth.auth_utils import get_current_user, public_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me")
def get_me(current_user=Depends(get_current_user)):
    return public_user(current_user)
