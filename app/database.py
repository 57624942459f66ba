from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import get_settings
from app.logging_config import get_logger

logger = get_logger(__name__)

JOBS_COLLECTION = "jobs"
APPLICATIONS_COLLECTION = "jobApplications"

client = None
db = None


def _describe_target(uri: str) -> str:
    if "mongodb+srv" in uri:
        return "MongoDB Atlas"
    if "localhost" in uri or "127.0.0.1" in uri:
        return "LOCAL MongoDB"
    return "MongoDB"


async def connect_to_mongo():
    global client, db

    settings = get_settings()
    target = _describe_target(settings.mongo_uri)

    client = AsyncIOMotorClient(settings.mongo_uri)
    db = client[settings.database_name]

    try:
        await client.admin.command("ping")
    except Exception:
        logger.exception("Could not reach %s (database=%s)", target, settings.database_name)
        raise

    logger.info("Connected to %s (database=%s)", target, settings.database_name)


async def close_mongo_connection():
    global client, db
    if client:
        client.close()
        logger.info("MongoDB connection closed")
    client = None
    db = None


def get_db() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the shared database handle."""
    if db is None:
        raise RuntimeError("Database is not connected; call connect_to_mongo() first")
    return db


def jobs_collection(database):
    return database[JOBS_COLLECTION]


def applications_collection(database):
    return database[APPLICATIONS_COLLECTION]
