import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from auth.auth_utils import create_access_token, hash_password, public_user, verify_password
import config
from database import get_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    role: Literal["admin", "student"] = "student"


async def read_credentials(request: Request) -> dict:
    # Accept JSON bodies as well as classic form posts
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return dict(form)


@router.post("/login")
def login(credentials: dict = Depends(read_credentials), db=Depends(get_database)):
    email = credentials.get("email") or credentials.get("username")
    password = credentials.get("password")

    if not email or not password:
        raise HTTPException(status_code=422, detail="Email and password required")

    user = db["users"].find_one({"email": email})

    if not user or not verify_password(password, user["password"]):
        logger.warning("Failed login", extra={"email": email})
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return {
        "token": create_access_token(data={"sub": user["email"]}),
        "user": public_user(user),
    }


@router.post("/signup", status_code=201)
def signup(payload: SignupRequest, db=Depends(get_database)):
    if payload.role == "admin" and not config.ALLOW_ADMIN_SIGNUP:
        logger.warning("Admin self-signup rejected", extra={"email": payload.email})
        raise HTTPException(status_code=403, detail="Admin accounts cannot be self-registered")

    users = db["users"]

    if users.find_one({"email": payload.email}):
        raise HTTPException(status_code=400, detail="User already exists")

    try:
        result = users.insert_one({
            "name": payload.name,
            "email": payload.email,
            "password": hash_password(payload.password),
            "role": payload.role,
        })
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="User already exists")

    user = users.find_one({"_id": result.inserted_id})
    logger.info("User signed up", extra={"email": payload.email, "role": payload.role})

    return {
        "token": create_access_token(data={"sub": user["email"]}),
        "user": public_user(user),
    }
