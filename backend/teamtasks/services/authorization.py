"""
Team membership checks.

Which check an operation gets is looked up in OPERATION_POLICY (see
authorize). Every check reads the Membership row for (team, caller); a
missing row or the wrong role is an AuthorizationError. Checking a *second*
identity (an assignee supplied by the caller) fails with a ValidationError
instead, since it concerns the caller's input rather than the caller's
rights.
"""

import logging
from typing import Optional

from teamtasks.core.constants import TEAM_ROLE_ADMIN
from teamtasks.core.exceptions import AuthorizationError, ValidationError
from teamtasks.core.permissions import Access, describe_action, required_access
from teamtasks.models.membership import Membership
from teamtasks.models.task import Task
from teamtasks.repositories import MembershipRepository

logger = logging.getLogger(__name__)


class AuthorizationService:
    def __init__(self, memberships: MembershipRepository):
        self.memberships = memberships

    async def require_member(self, team_id: str, user_id: str, operation: str) -> Membership:
        """
        Require any membership (admin or member) in the team.

        Raises:
            AuthorizationError: If the caller has no membership row
        """
        membership = await self.memberships.get(team_id, user_id)
        if membership is None:
            logger.info(f"Denied {operation}: {user_id} is not a member of team {team_id}")
            raise AuthorizationError(
                f"You must be a team member to {describe_action(operation)}"
            )
        return membership

    async def require_admin(self, team_id: str, user_id: str, operation: str) -> Membership:
        """
        Require an admin membership in the team.

        Raises:
            AuthorizationError: If the caller is not a member, or not an admin
        """
        membership = await self.require_member(team_id, user_id, operation)
        if membership.role != TEAM_ROLE_ADMIN:
            logger.info(f"Denied {operation}: {user_id} is not an admin of team {team_id}")
            raise AuthorizationError(f"Only team admins can {describe_action(operation)}")
        return membership

    async def require_assignee_or_admin(self, task: Task, user_id: str, operation: str) -> Membership:
        """
        Require that the caller is the task's current assignee or a team admin.

        Raises:
            AuthorizationError: If the caller is neither
        """
        membership = await self.require_member(task.team_id, user_id, operation)
        if membership.role != TEAM_ROLE_ADMIN and task.assigned_to != user_id:
            logger.info(f"Denied {operation}: {user_id} is not assignee of task {task.id}")
            raise AuthorizationError(
                "You can only update tasks assigned to you or if you are a team admin"
            )
        return membership

    async def require_assignable(self, team_id: str, assignee_id: Optional[str]) -> None:
        """
        Require that a proposed assignee is a member of the team.

        Raises:
            ValidationError: If the assignee has no membership row
        """
        if assignee_id is None:
            return
        if await self.memberships.get(team_id, assignee_id) is None:
            raise ValidationError("Cannot assign task to user who is not a team member")

    async def authorize(
        self,
        operation: str,
        team_id: str,
        user_id: str,
        task: Optional[Task] = None,
    ) -> Optional[Membership]:
        """
        Apply the check OPERATION_POLICY names for the operation.

        ASSIGNEE_OR_ADMIN operations need the task they act on. Returns the
        caller's membership, or None for operations that are not team-scoped.
        """
        access = required_access(operation)
        if access == Access.AUTHENTICATED:
            return None
        if access == Access.MEMBER:
            return await self.require_member(team_id, user_id, operation)
        if access == Access.ADMIN:
            return await self.require_admin(team_id, user_id, operation)
        if access == Access.ASSIGNEE_OR_ADMIN:
            return await self.require_assignee_or_admin(task, user_id, operation)
        raise ValueError(f"Unsupported access level '{access}' for {operation}")
