"""
Task operations.

Each operation validates its input, checks the caller's relationship to the
team, touches the store, and only then dispatches notifications.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from teamtasks.core import utc_now
from teamtasks.core.config import settings
from teamtasks.core.constants import (
    DEFAULT_TASK_PRIORITY,
    DEFAULT_TASK_STATUS,
    SEARCH_TERM_MIN_LENGTH,
    TASK_DESCRIPTION_MAX_LENGTH,
    TASK_DESCRIPTION_MIN_LENGTH,
    TASK_PRIORITIES,
    TASK_STATUSES,
    TASK_TITLE_MAX_LENGTH,
    TASK_TITLE_MIN_LENGTH,
    TEAM_ROLE_ADMIN,
    get_priority_value,
)
from teamtasks.core.exceptions import NotFoundError, ValidationError
from teamtasks.core.permissions import Operations
from teamtasks.core.validation import (
    require_enum,
    require_future_or_absent_date,
    require_length,
    require_non_empty,
    require_parseable_date,
)
from teamtasks.models.membership import Membership
from teamtasks.models.task import Task
from teamtasks.repositories import (
    ConditionalWriteError,
    TaskRepository,
    TeamRepository,
)
from teamtasks.schemas.operations import (
    CreateTaskArgs,
    SearchTasksArgs,
    TaskKeyArgs,
    TeamScopedArgs,
    UpdateTaskArgs,
    UpdateTaskDetailsArgs,
)
from teamtasks.schemas.responses import DeleteTaskResponse, TaskResponse
from teamtasks.services.authorization import AuthorizationService
from teamtasks.services.notifications import templates
from teamtasks.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)

# Fields compared case-insensitively by searchTasks
SEARCHABLE_FIELDS = ("title", "description", "assigned_to", "status", "priority")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def is_visible_to(task: Task, membership: Membership) -> bool:
    """Admins see every task; members see their own and unassigned tasks."""
    if membership.role == TEAM_ROLE_ADMIN:
        return True
    return not task.assigned_to or task.assigned_to == membership.user_id


def sort_by_priority(tasks: List[Task]) -> List[Task]:
    """High before Medium before Low; newest first within a priority."""
    return sorted(
        tasks,
        key=lambda t: (-get_priority_value(t.priority), -t.created_at.timestamp()),
    )


def matches_term(task: Task, term: str) -> bool:
    needle = term.lower()
    for field in SEARCHABLE_FIELDS:
        value = getattr(task, field)
        if value and needle in value.lower():
            return True
    return False


def rank_search_results(tasks: List[Task], term: str) -> List[Task]:
    """Title matches before other matches; newest first within each group."""
    needle = term.lower()
    return sorted(
        tasks,
        key=lambda t: (0 if needle in t.title.lower() else 1, -t.created_at.timestamp()),
    )


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        teams: TeamRepository,
        authorization: AuthorizationService,
        notifications: NotificationService,
    ):
        self.tasks = tasks
        self.teams = teams
        self.authorization = authorization
        self.notifications = notifications

    async def _get_task(self, team_id: str, task_id: str) -> Task:
        task = await self.tasks.get(team_id, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def _team_name(self, team_id: str) -> str:
        """Display name for notification bodies; falls back to the team id."""
        team = await self.teams.get(team_id)
        return team.name if team else team_id

    async def _apply_update(
        self,
        task: Task,
        update_data: Dict[str, Any],
        already_applied: Optional[Callable[[Task], bool]] = None,
    ) -> Tuple[Task, bool]:
        """
        Write update_data if the task is unchanged since it was read.

        When the write loses a race, the current task is re-read. If
        already_applied accepts it, the concurrent writer left the task in
        the requested state and it is returned with changed=False.

        Returns:
            (task, changed)

        Raises:
            NotFoundError: If the task was deleted meanwhile
            ValidationError: If another request modified it meanwhile
        """
        try:
            updated = await self.tasks.update_if_unchanged(
                task.team_id, task.id, update_data, last_updated_at=task.updated_at
            )
            return updated, True
        except ConditionalWriteError:
            current = await self.tasks.get(task.team_id, task.id)
            if current is None:
                raise NotFoundError("Task not found")
            if already_applied is not None and already_applied(current):
                return current, False
            raise ValidationError("Task was modified by another request, reload and try again")

    async def create_task(self, args: CreateTaskArgs, caller_id: str) -> TaskResponse:
        require_non_empty(args.team_id, "Team ID")
        require_non_empty(args.title, "Task title")
        require_non_empty(args.description, "Task description")
        title = require_length(args.title, "Task title", TASK_TITLE_MIN_LENGTH, TASK_TITLE_MAX_LENGTH)
        description = require_length(
            args.description,
            "Task description",
            TASK_DESCRIPTION_MIN_LENGTH,
            TASK_DESCRIPTION_MAX_LENGTH,
        )
        require_enum(args.priority, TASK_PRIORITIES, "priority")
        deadline = _blank_to_none(args.deadline)
        require_future_or_absent_date(deadline)
        team_id = args.team_id

        await self.authorization.authorize(Operations.CREATE_TASK, team_id, caller_id)

        assignee = _blank_to_none(args.assigned_to)
        await self.authorization.require_assignable(team_id, assignee)

        team = await self.teams.get(team_id)
        if team is None:
            raise NotFoundError("Team not found")

        timestamp = utc_now()
        task = Task(
            team_id=team_id,
            title=title,
            description=description,
            assigned_to=assignee,
            status=DEFAULT_TASK_STATUS,
            priority=args.priority or DEFAULT_TASK_PRIORITY,
            deadline=deadline,
            created_by=caller_id,
            created_at=timestamp,
            updated_at=timestamp,
            updated_by=caller_id,
        )
        try:
            await self.tasks.create(task)
        except ConditionalWriteError:
            raise ValidationError("Task creation failed - duplicate data detected")

        if assignee:
            subject, message, metadata = templates.task_assigned(task, team.name)
            await self.notifications.send(subject, message, assignee, metadata)

        logger.info(f"Task {task.id} created in team {team_id} by {caller_id}")
        return TaskResponse.from_model(task)

    async def update_task(self, args: UpdateTaskArgs, caller_id: str) -> TaskResponse:
        """
        Change a task's status.

        Setting the status it already has is a no-op: nothing is written and
        nobody is notified.
        """
        require_non_empty(args.team_id, "Team ID")
        require_non_empty(args.task_id, "Task ID")
        require_non_empty(args.status, "Task status")

        task = await self._get_task(args.team_id, args.task_id)
        await self.authorization.authorize(Operations.UPDATE_TASK, task.team_id, caller_id, task=task)
        require_enum(args.status, TASK_STATUSES, "status")

        if args.status == task.status:
            logger.debug(f"Task {task.id} already '{task.status}', nothing to update")
            return TaskResponse.from_model(task)

        old_status = task.status
        updated, changed = await self._apply_update(
            task,
            {"status": args.status, "updated_at": utc_now(), "updated_by": caller_id},
            already_applied=lambda current: current.status == args.status,
        )
        if not changed:
            logger.debug(f"Task {task.id} moved to '{args.status}' by a concurrent request")
            return TaskResponse.from_model(updated)

        recipients = []
        for user_id in (task.created_by, task.assigned_to):
            if user_id and user_id != caller_id and user_id not in recipients:
                recipients.append(user_id)

        if recipients:
            team_name = await self._team_name(task.team_id)
            subject, message, metadata = templates.task_status_updated(
                updated, team_name, old_status, changed_by=caller_id
            )
            await self.notifications.send_many(subject, message, recipients, metadata)

        logger.info(f"Task {task.id} status '{old_status}' -> '{updated.status}' by {caller_id}")
        return TaskResponse.from_model(updated)

    async def update_task_details(self, args: UpdateTaskDetailsArgs, caller_id: str) -> TaskResponse:
        """
        Update any of title, description, assignedTo, deadline and priority.

        Only fields present in the request are validated and written. The
        deadline only has to parse here; admins may keep or set a date that
        has already passed.
        """
        require_non_empty(args.team_id, "Team ID")
        require_non_empty(args.task_id, "Task ID")

        task = await self._get_task(args.team_id, args.task_id)
        await self.authorization.authorize(Operations.UPDATE_TASK_DETAILS, task.team_id, caller_id)

        update_data: Dict[str, Any] = {}
        for field, value in args.supplied_fields().items():
            if field == "title":
                require_non_empty(value, "Task title")
                update_data["title"] = require_length(
                    value, "Task title", TASK_TITLE_MIN_LENGTH, TASK_TITLE_MAX_LENGTH
                )
            elif field == "description":
                require_non_empty(value, "Task description")
                update_data["description"] = require_length(
                    value,
                    "Task description",
                    TASK_DESCRIPTION_MIN_LENGTH,
                    TASK_DESCRIPTION_MAX_LENGTH,
                )
            elif field == "assigned_to":
                assignee = _blank_to_none(value)
                await self.authorization.require_assignable(task.team_id, assignee)
                update_data["assigned_to"] = assignee
            elif field == "deadline":
                update_data["deadline"] = require_parseable_date(_blank_to_none(value))
            elif field == "priority":
                require_non_empty(value, "Task priority")
                update_data["priority"] = require_enum(value, TASK_PRIORITIES, "priority")

        if not update_data:
            return TaskResponse.from_model(task)

        update_data["updated_at"] = utc_now()
        update_data["updated_by"] = caller_id
        updated, _ = await self._apply_update(task, update_data)

        logger.info(
            f"Task {task.id} details updated by {caller_id}: {sorted(update_data)}"
        )
        return TaskResponse.from_model(updated)

    async def delete_task(self, args: TaskKeyArgs, caller_id: str) -> DeleteTaskResponse:
        require_non_empty(args.team_id, "Team ID")
        require_non_empty(args.task_id, "Task ID")

        # Membership is checked before the task is read so that non-admins
        # learn nothing about which task ids exist.
        await self.authorization.authorize(Operations.DELETE_TASK, args.team_id, caller_id)
        task = await self._get_task(args.team_id, args.task_id)

        await self.tasks.delete(task.team_id, task.id)

        if task.assigned_to and task.assigned_to != caller_id:
            team_name = await self._team_name(task.team_id)
            subject, message, metadata = templates.task_deleted(task, team_name)
            await self.notifications.send(subject, message, task.assigned_to, metadata)

        logger.info(f"Task {task.id} deleted from team {task.team_id} by {caller_id}")
        return DeleteTaskResponse(success=True, task_id=task.id)

    async def _visible_tasks(self, team_id: str, caller_id: str, operation: str) -> List[Task]:
        membership = await self.authorization.authorize(operation, team_id, caller_id)
        tasks = await self.tasks.list_for_team(team_id)
        return [t for t in tasks if is_visible_to(t, membership)]

    async def list_tasks(self, args: TeamScopedArgs, caller_id: str) -> List[TaskResponse]:
        require_non_empty(args.team_id, "Team ID")
        tasks = await self._visible_tasks(args.team_id, caller_id, Operations.LIST_TASKS)
        return [TaskResponse.from_model(t) for t in sort_by_priority(tasks)]

    async def search_tasks(self, args: SearchTasksArgs, caller_id: str) -> List[TaskResponse]:
        require_non_empty(args.team_id, "Team ID")
        require_non_empty(args.query, "Search query")
        term = require_length(
            args.query, "Search query", SEARCH_TERM_MIN_LENGTH, settings.SEARCH_TERM_MAX_LENGTH
        )

        tasks = await self._visible_tasks(args.team_id, caller_id, Operations.SEARCH_TASKS)
        matches = [t for t in tasks if matches_term(t, term)]
        return [TaskResponse.from_model(t) for t in rank_search_results(matches, term)]
