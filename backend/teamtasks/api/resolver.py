"""
Operation Resolver

Single entry point for every operation: derives the caller's identity,
routes by operation name, and normalizes errors into the four kinds the
caller branches on.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import ValidationError as PydanticValidationError

from teamtasks.core.exceptions import (
    BUSINESS_ERRORS,
    InternalError,
    ValidationError,
)
from teamtasks.core.identity import normalize_user_id
from teamtasks.core.metrics import track_operation
from teamtasks.core.permissions import Operations
from teamtasks.schemas.operations import (
    AddMemberArgs,
    CreateTaskArgs,
    CreateTeamArgs,
    GetUserArgs,
    OperationArguments,
    OperationRequest,
    SearchTasksArgs,
    TaskKeyArgs,
    TeamScopedArgs,
    UpdateTaskArgs,
    UpdateTaskDetailsArgs,
)
from teamtasks.schemas.responses import ResponseModel
from teamtasks.services.tasks import TaskService
from teamtasks.services.teams import TeamService
from teamtasks.services.users import UserService

logger = logging.getLogger(__name__)

Handler = Callable[[Any, str], Awaitable[Any]]


def _describe_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg')}")
    return "Invalid arguments - " + "; ".join(parts)


def _to_payload(result: Any) -> Any:
    if isinstance(result, ResponseModel):
        return result.to_payload()
    if isinstance(result, list):
        return [_to_payload(item) for item in result]
    return result


class OperationResolver:
    def __init__(self, teams: TeamService, tasks: TaskService, users: UserService):
        self.teams = teams
        self.tasks = tasks
        self.users = users
        self.routes: Dict[str, Tuple[Type[OperationArguments], Handler]] = {
            Operations.CREATE_TEAM: (CreateTeamArgs, teams.create_team),
            Operations.ADD_MEMBER: (AddMemberArgs, teams.add_member),
            Operations.CREATE_TASK: (CreateTaskArgs, tasks.create_task),
            Operations.UPDATE_TASK: (UpdateTaskArgs, tasks.update_task),
            Operations.UPDATE_TASK_DETAILS: (UpdateTaskDetailsArgs, tasks.update_task_details),
            Operations.DELETE_TASK: (TaskKeyArgs, tasks.delete_task),
            Operations.LIST_TEAMS: (OperationArguments, self._list_teams),
            Operations.LIST_TASKS: (TeamScopedArgs, tasks.list_tasks),
            Operations.SEARCH_TASKS: (SearchTasksArgs, tasks.search_tasks),
            Operations.LIST_MEMBERS: (TeamScopedArgs, teams.list_members),
            Operations.GET_USER: (GetUserArgs, users.get_user),
        }

    async def _list_teams(self, args: OperationArguments, caller_id: str):
        return await self.teams.list_teams(caller_id)

    async def resolve(self, request: Union[OperationRequest, Mapping[str, Any]]) -> Any:
        """
        Run one operation and return its camelCase result payload.

        Raises:
            ValidationError, AuthorizationError, NotFoundError: Passed through
            InternalError: For anything else; the cause is logged, not returned
        """
        operation: Optional[str] = None
        caller_id: Optional[str] = None
        arguments: Mapping[str, Any] = {}

        try:
            if not isinstance(request, OperationRequest):
                try:
                    request = OperationRequest.model_validate(request)
                except PydanticValidationError as e:
                    raise ValidationError(_describe_validation_error(e))

            operation = request.operation
            arguments = request.arguments
            if not operation:
                raise ValidationError("Missing operation name - unable to determine operation")

            caller_id = normalize_user_id(request.identity)

            route = self.routes.get(operation)
            if route is None:
                raise ValidationError(f"Unknown operation: {operation}")
            args_model, handler = route

            try:
                args = args_model.model_validate(arguments)
            except PydanticValidationError as e:
                raise ValidationError(_describe_validation_error(e))

            logger.info(f"[{operation}] started by {caller_id}")
            with track_operation(operation):
                result = await handler(args, caller_id)

        except BUSINESS_ERRORS as e:
            logger.info(
                f"[{operation or 'unknown'}] {e.error_type} for {caller_id or 'unknown'}: {e.message}"
            )
            raise
        except InternalError:
            raise
        except Exception as e:
            logger.exception(
                f"[{operation or 'unknown'}] failed for {caller_id or 'unknown'} "
                f"with arguments {dict(arguments)}: {e}"
            )
            raise InternalError(f"Operation {operation or 'unknown'} failed")

        count = len(result) if isinstance(result, list) else "N/A"
        logger.info(f"[{operation}] completed for {caller_id} (results: {count})")
        return _to_payload(result)

