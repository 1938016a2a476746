import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from teamtasks.core.config import settings

logger = logging.getLogger(__name__)


class Database:
    client: AsyncIOMotorClient = None


db = Database()


async def get_database() -> AsyncIOMotorDatabase:
    return db.client[settings.DATABASE_NAME]


async def connect_to_mongo():
    # tz_aware: datetimes come back as UTC-aware, so updated_at read from a
    # task compares equal to the value used as the update precondition
    db.client = AsyncIOMotorClient(
        settings.MONGODB_URL,
        tz_aware=True,
        appname=settings.PROJECT_NAME,
    )
    logger.info(f"Connected to MongoDB database '{settings.DATABASE_NAME}'")


async def close_mongo_connection():
    if db.client is not None:
        db.client.close()
        db.client = None
        logger.info("Closed MongoDB connection")
