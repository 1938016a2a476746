from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from teamtasks.models.membership import Membership
from teamtasks.models.task import Task
from teamtasks.models.team import Team
from teamtasks.models.user import User


class ResponseModel(BaseModel):
    """Results are serialized with camelCase keys for the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TeamResponse(ResponseModel):
    team_id: str
    name: str
    admin_id: str
    created_at: datetime
    user_role: Optional[str] = None

    @classmethod
    def from_model(cls, team: Team, user_role: Optional[str] = None) -> "TeamResponse":
        return cls(
            team_id=team.id,
            name=team.name,
            admin_id=team.admin_id,
            created_at=team.created_at,
            user_role=user_role,
        )


class MembershipResponse(ResponseModel):
    team_id: str
    user_id: str
    role: str
    joined_at: datetime
    added_by: Optional[str] = None

    @classmethod
    def from_model(cls, membership: Membership) -> "MembershipResponse":
        return cls(
            team_id=membership.team_id,
            user_id=membership.user_id,
            role=membership.role,
            joined_at=membership.joined_at,
            added_by=membership.added_by,
        )


class TaskResponse(ResponseModel):
    team_id: str
    task_id: str
    title: str
    description: str
    assigned_to: Optional[str] = None
    status: str
    priority: str
    deadline: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    updated_by: str

    @classmethod
    def from_model(cls, task: Task) -> "TaskResponse":
        return cls(
            team_id=task.team_id,
            task_id=task.id,
            title=task.title,
            description=task.description,
            assigned_to=task.assigned_to,
            status=task.status,
            priority=task.priority,
            deadline=task.deadline,
            created_by=task.created_by,
            created_at=task.created_at,
            updated_at=task.updated_at,
            updated_by=task.updated_by,
        )


class DeleteTaskResponse(ResponseModel):
    success: bool
    task_id: str


class UserResponse(ResponseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    is_default: bool = False

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            user_id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
        )
