import logging

import pymongo

from teamtasks.db.mongodb import get_database

logger = logging.getLogger(__name__)


async def create_indexes(db):
    """Creates indexes for all collections to ensure performance and key uniqueness."""
    logger.info("Creating database indexes...")

    # Memberships: one row per (team, user); secondary index for listTeams
    await db["memberships"].create_index(
        [("team_id", pymongo.ASCENDING), ("user_id", pymongo.ASCENDING)],
        unique=True,
    )
    await db["memberships"].create_index("user_id")

    # Tasks: partitioned by team, newest first
    await db["tasks"].create_index("team_id")
    await db["tasks"].create_index(
        [("team_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]
    )
    await db["tasks"].create_index("assigned_to")

    # Users
    await db["users"].create_index("email")

    logger.info("Database indexes created")


async def init_db():
    db = await get_database()
    await create_indexes(db)
