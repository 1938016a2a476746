"""
User Repository

Read-only access to the informational user projections.
"""

from typing import Optional

from teamtasks.models.user import User
from teamtasks.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user projection lookups."""

    collection_name = "users"
    model_class = User

    async def get(self, user_id: str) -> Optional[User]:
        return await self.get_by_id(user_id)
