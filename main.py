import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from config import FRONTEND_URL, LOG_FORMAT, LOG_LEVEL
from database import ensure_indexes, get_database
from logging_setup import setup_logging

from auth.routes import router as auth_router
from users.routes import router as users_router
from colleges.routes import router as colleges_router
from dashboard.routes import router as dashboard_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    ensure_indexes(get_database())
    logger.info("College discovery API started")
    yield


app = FastAPI(title="College Discovery API", lifespan=lifespan)

# ---- CORS CONFIG ----
allowed_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
]

if FRONTEND_URL:
    allowed_origins.append(FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- SERVER FAULTS ----
# Never leak driver or stack details to clients
@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error("Database error", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---- API ROUTERS ----
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(colleges_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


# ---- HEALTH CHECK ----
@app.get("/")
def root():
    return {"status": "Backend running"}
