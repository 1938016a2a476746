import logging
from typing import Optional

from teamtasks.repositories import UserRepository
from teamtasks.schemas.operations import GetUserArgs
from teamtasks.schemas.responses import UserResponse

logger = logging.getLogger(__name__)


def default_display_name(user_id: str) -> str:
    """Local part of an email-like id, otherwise the id itself."""
    if "@" in user_id:
        local_part = user_id.split("@", 1)[0]
        if local_part:
            return local_part
    return user_id


class UserService:
    def __init__(self, users: UserRepository):
        self.users = users

    async def get_user(self, args: GetUserArgs, caller_id: str) -> UserResponse:
        """
        Look up a user projection; defaults to the caller.

        A missing record is not an error: a default projection flagged with
        is_default is returned instead.
        """
        target_id: Optional[str] = (args.user_id or "").strip() or caller_id

        user = await self.users.get(target_id)
        if user is None:
            logger.debug(f"No user record for {target_id}, returning default projection")
            return UserResponse(
                user_id=target_id,
                email=target_id if "@" in target_id else None,
                name=default_display_name(target_id),
                is_default=True,
            )
        return UserResponse.from_model(user)
