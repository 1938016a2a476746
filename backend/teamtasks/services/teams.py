"""
Team operations: creating teams, adding members, listing teams and members.
"""

import asyncio
import logging
from typing import List

from teamtasks.core import utc_now
from teamtasks.core.constants import (
    TEAM_NAME_MAX_LENGTH,
    TEAM_NAME_MIN_LENGTH,
    TEAM_ROLE_ADMIN,
    TEAM_ROLE_MEMBER,
    TEAM_ROLE_ORDER,
)
from teamtasks.core.exceptions import NotFoundError, ValidationError
from teamtasks.core.permissions import Operations
from teamtasks.core.validation import require_email_shape, require_length, require_non_empty
from teamtasks.models.membership import Membership
from teamtasks.models.team import Team
from teamtasks.repositories import ConditionalWriteError, MembershipRepository, TeamRepository
from teamtasks.schemas.operations import AddMemberArgs, CreateTeamArgs, TeamScopedArgs
from teamtasks.schemas.responses import MembershipResponse, TeamResponse
from teamtasks.services.authorization import AuthorizationService
from teamtasks.services.notifications import templates
from teamtasks.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)


def sort_members(members: List[Membership]) -> List[Membership]:
    """Admins first, then members; oldest membership first within a role."""
    return sorted(
        members,
        key=lambda m: (TEAM_ROLE_ORDER.get(m.role, len(TEAM_ROLE_ORDER)), m.joined_at),
    )


class TeamService:
    def __init__(
        self,
        teams: TeamRepository,
        memberships: MembershipRepository,
        authorization: AuthorizationService,
        notifications: NotificationService,
    ):
        self.teams = teams
        self.memberships = memberships
        self.authorization = authorization
        self.notifications = notifications

    async def create_team(self, args: CreateTeamArgs, caller_id: str) -> TeamResponse:
        """
        Create a team with the caller as its admin.

        The team and the admin membership are written in one transaction;
        neither exists without the other.
        """
        require_non_empty(args.name, "Team name")
        name = require_length(args.name, "Team name", TEAM_NAME_MIN_LENGTH, TEAM_NAME_MAX_LENGTH)

        timestamp = utc_now()
        team = Team(name=name, admin_id=caller_id, created_at=timestamp)
        membership = Membership(
            team_id=team.id,
            user_id=caller_id,
            role=TEAM_ROLE_ADMIN,
            joined_at=timestamp,
        )

        try:
            await self.teams.create_with_admin(team, membership)
        except ConditionalWriteError:
            raise ValidationError("Team creation failed - duplicate data detected")

        subject, message, metadata = templates.team_created(team)
        await self.notifications.send(subject, message, caller_id, metadata)

        logger.info(f"Team {team.id} '{team.name}' created by {caller_id}")
        return TeamResponse.from_model(team, user_role=TEAM_ROLE_ADMIN)

    async def add_member(self, args: AddMemberArgs, caller_id: str) -> MembershipResponse:
        require_non_empty(args.team_id, "Team ID")
        require_non_empty(args.email, "Email")
        email = require_email_shape(args.email.strip())
        team_id = args.team_id

        await self.authorization.authorize(Operations.ADD_MEMBER, team_id, caller_id)

        if email == caller_id:
            raise ValidationError("You are already a member of this team")

        if await self.memberships.get(team_id, email) is not None:
            raise ValidationError("User is already a member of this team")

        team = await self.teams.get(team_id)
        if team is None:
            raise NotFoundError("Team not found")

        membership = Membership(
            team_id=team_id,
            user_id=email,
            role=TEAM_ROLE_MEMBER,
            added_by=caller_id,
        )
        try:
            await self.memberships.create(membership)
        except ConditionalWriteError:
            # Added by a concurrent request after our existence check
            raise ValidationError("User is already a member of this team")

        subject, message, metadata = templates.team_invitation(team, invited_by=caller_id)
        await self.notifications.send(subject, message, email, metadata)

        logger.info(f"{email} added to team {team_id} by {caller_id}")
        return MembershipResponse.from_model(membership)

    async def list_teams(self, caller_id: str) -> List[TeamResponse]:
        """
        Teams the caller belongs to, with the caller's role in each.

        A team that fails to load is logged and left out rather than failing
        the whole listing.
        """
        memberships = await self.memberships.list_for_user(caller_id)
        if not memberships:
            return []

        results = await asyncio.gather(
            *(self.teams.get(m.team_id) for m in memberships),
            return_exceptions=True,
        )

        teams = []
        for membership, result in zip(memberships, results):
            if isinstance(result, BaseException):
                logger.warning(f"Skipping team {membership.team_id} for {caller_id}: {result}")
                continue
            if result is None:
                logger.warning(f"Membership of {caller_id} references missing team {membership.team_id}")
                continue
            teams.append(TeamResponse.from_model(result, user_role=membership.role))
        return teams

    async def list_members(self, args: TeamScopedArgs, caller_id: str) -> List[MembershipResponse]:
        require_non_empty(args.team_id, "Team ID")
        await self.authorization.authorize(Operations.LIST_MEMBERS, args.team_id, caller_id)

        members = await self.memberships.list_for_team(args.team_id)
        return [MembershipResponse.from_model(m) for m in sort_members(members)]
