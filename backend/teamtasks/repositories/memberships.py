"""
Membership Repository

Membership rows are keyed by (team_id, user_id); see membership_key.
"""

from typing import List, Optional

from teamtasks.models.membership import Membership, membership_key
from teamtasks.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[Membership]):
    """Repository for team membership database operations."""

    collection_name = "memberships"
    model_class = Membership

    async def get(self, team_id: str, user_id: str) -> Optional[Membership]:
        """Get the membership row for (team, user), or None."""
        return await self.get_by_id(membership_key(team_id, user_id))

    async def list_for_team(self, team_id: str) -> List[Membership]:
        return await self.find_many({"team_id": team_id})

    async def list_for_user(self, user_id: str) -> List[Membership]:
        """All memberships of a user (served by the user_id index)."""
        return await self.find_many({"user_id": user_id})
