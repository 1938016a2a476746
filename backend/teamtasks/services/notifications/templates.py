"""
Notification subjects and bodies for each action.

Each builder returns (subject, message, metadata).
"""

from typing import Any, Dict, Tuple

from teamtasks.core.constants import (
    ACTION_TASK_ASSIGNED,
    ACTION_TASK_DELETED,
    ACTION_TASK_STATUS_UPDATED,
    ACTION_TEAM_CREATED,
    ACTION_TEAM_INVITATION,
)
from teamtasks.models.task import Task
from teamtasks.models.team import Team

Notification = Tuple[str, str, Dict[str, Any]]


def team_created(team: Team) -> Notification:
    return (
        "Team Created Successfully",
        f'Your team "{team.name}" has been created successfully. '
        "You can now add members and create tasks.",
        {"teamId": team.id, "teamName": team.name, "action": ACTION_TEAM_CREATED},
    )


def team_invitation(team: Team, invited_by: str) -> Notification:
    return (
        "Team Invitation",
        f'You have been added to the team "{team.name}". Start collaborating on tasks now!',
        {
            "teamId": team.id,
            "teamName": team.name,
            "invitedBy": invited_by,
            "action": ACTION_TEAM_INVITATION,
        },
    )


def task_assigned(task: Task, team_name: str) -> Notification:
    return (
        "New Task Assignment",
        f'You have been assigned a new task: "{task.title}" in team "{team_name}". '
        f"Priority: {task.priority}",
        {
            "taskId": task.id,
            "taskTitle": task.title,
            "teamId": task.team_id,
            "teamName": team_name,
            "priority": task.priority,
            "deadline": task.deadline,
            "action": ACTION_TASK_ASSIGNED,
        },
    )


def task_status_updated(task: Task, team_name: str, old_status: str, changed_by: str) -> Notification:
    return (
        "Task Status Updated",
        f'The task "{task.title}" in team "{team_name}" has been updated '
        f'from "{old_status}" to "{task.status}" by {changed_by}.',
        {
            "taskId": task.id,
            "taskTitle": task.title,
            "teamId": task.team_id,
            "teamName": team_name,
            "oldStatus": old_status,
            "newStatus": task.status,
            "action": ACTION_TASK_STATUS_UPDATED,
        },
    )


def task_deleted(task: Task, team_name: str) -> Notification:
    return (
        "Task Deleted",
        f'The task "{task.title}" in team "{team_name}" has been deleted.',
        {
            "taskId": task.id,
            "taskTitle": task.title,
            "teamId": task.team_id,
            "teamName": team_name,
            "action": ACTION_TASK_DELETED,
        },
    )
