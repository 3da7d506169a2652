import logging
import asyncio
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from app.custom_error import ConfigurationMissing, PersistenceFailure
from app.models.user import User
from app.services.config import settings

logger = logging.getLogger("uvicorn.error")

_client: Optional[AsyncIOMotorClient] = None
_db_lock = asyncio.Lock()


def is_connected() -> bool:
    return _client is not None


async def init_db():
    global _client

    if _client is not None:
        logger.debug("Database already initialized")
        return

    if not settings.MONGODB_URI:
        logger.error("❌ MONGODB_URI is not defined in the environment variables")
        raise ConfigurationMissing("MONGODB_URI")

    logger.info("Connecting to MongoDB...")
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    db = client[settings.DB_NAME]

    try:
        logger.info("Initializing Beanie with models...")
        await init_beanie(database=db, document_models=[User])
    except Exception as e:
        client.close()
        logger.error(f"❌ MongoDB connection error: {repr(e)}")
        raise PersistenceFailure("Failed to connect to MongoDB") from e

    _client = client
    logger.info(f"✅ MongoDB connected (database: {settings.DB_NAME})")


async def ensure_db_initialized():
    # Fast path once connected; the lock only matters for concurrent cold starts
    if _client is not None:
        logger.debug("MongoDB is already connected")
        return

    async with _db_lock:
        await init_db()


async def close_db():
    global _client

    if _client is None:
        return

    _client.close()
    _client = None
    logger.info("MongoDB connection closed.")
