from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from teamtasks.core import utc_now
from teamtasks.core.constants import TEAM_ROLE_MEMBER
from teamtasks.models.types import PyObjectId, UTCDateTime


def membership_key(team_id: str, user_id: str) -> str:
    """Primary key of the membership row for (team, user)."""
    return f"{team_id}#{user_id}"


class Membership(BaseModel):
    """A user's role in one team. Exactly one row exists per (team, user)."""

    id: Optional[PyObjectId] = Field(
        default=None,
        validation_alias="_id",
        serialization_alias="_id",
    )
    team_id: str
    user_id: str
    role: str = TEAM_ROLE_MEMBER
    joined_at: UTCDateTime = Field(default_factory=utc_now)
    # Absent on the admin membership created together with the team
    added_by: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _derive_key(self) -> "Membership":
        if self.id is None:
            self.id = membership_key(self.team_id, self.user_id)
        return self
