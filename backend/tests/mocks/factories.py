"""Factory functions for domain records with sensible defaults."""

from datetime import datetime, timedelta, timezone

from teamtasks.core.constants import TEAM_ROLE_ADMIN, TEAM_ROLE_MEMBER
from teamtasks.models.membership import Membership
from teamtasks.models.task import Task
from teamtasks.models.team import Team

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A timestamp `minutes` after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_team(id="team-1", name="Alpha", admin_id="admin@example.com", **kwargs):
    return Team(id=id, name=name, admin_id=admin_id, created_at=kwargs.pop("created_at", BASE_TIME), **kwargs)


def make_membership(team_id="team-1", user_id="member@example.com", role=TEAM_ROLE_MEMBER, joined_at=None, **kwargs):
    return Membership(
        team_id=team_id,
        user_id=user_id,
        role=role,
        joined_at=joined_at or BASE_TIME,
        **kwargs,
    )


def make_admin(team_id="team-1", user_id="admin@example.com", joined_at=None):
    return make_membership(team_id=team_id, user_id=user_id, role=TEAM_ROLE_ADMIN, joined_at=joined_at)


def make_task(
    id="task-1",
    team_id="team-1",
    title="Fix bug",
    description="Crash on save",
    created_by="admin@example.com",
    created_at=None,
    **kwargs,
):
    created_at = created_at or BASE_TIME
    return Task(
        id=id,
        team_id=team_id,
        title=title,
        description=description,
        created_by=created_by,
        created_at=created_at,
        updated_at=kwargs.pop("updated_at", created_at),
        updated_by=kwargs.pop("updated_by", created_by),
        **kwargs,
    )
