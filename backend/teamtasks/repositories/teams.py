"""
Team Repository

Centralizes all database operations for teams.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from teamtasks.core.metrics import track_db_operation
from teamtasks.models.membership import Membership
from teamtasks.models.team import Team
from teamtasks.repositories.base import BaseRepository, ConditionalWriteError


class TeamRepository(BaseRepository[Team]):
    """Repository for team database operations."""

    collection_name = "teams"
    model_class = Team

    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db)
        self.memberships = db["memberships"]

    async def get(self, team_id: str) -> Optional[Team]:
        return await self.get_by_id(team_id)

    async def create_with_admin(self, team: Team, membership: Membership) -> Team:
        """
        Insert a team and its creator's admin membership in one transaction.

        Both inserts require the item not to exist yet; if either key is
        taken the transaction aborts and neither row is written.

        Raises:
            ConditionalWriteError: If the team or membership already exists
        """
        async with await self.db.client.start_session() as session:
            try:
                async with session.start_transaction():
                    with track_db_operation("teams", "transaction"):
                        await self.collection.insert_one(
                            team.model_dump(by_alias=True), session=session
                        )
                        await self.memberships.insert_one(
                            membership.model_dump(by_alias=True), session=session
                        )
            except DuplicateKeyError as e:
                raise ConditionalWriteError("teams: team or membership already exists") from e
        return team
