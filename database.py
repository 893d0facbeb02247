from pymongo import ASCENDING, MongoClient

from config import MONGO_URL

if not MONGO_URL:
    raise RuntimeError("MONGO_URL is not set")

client = MongoClient(MONGO_URL)

db = client.get_database()

users_collection = db["users"]


def get_database():
    """FastAPI dependency; tests override it with an in-memory database."""
    return db


def ensure_indexes(database):
    # Slug and email uniqueness are enforced by the store, not by callers
    database["colleges"].create_index([("slug", ASCENDING)], unique=True)
    database["colleges"].create_index([("status", ASCENDING), ("ranking", ASCENDING)])
    database["users"].create_index([("email", ASCENDING)], unique=True)
