from teamtasks.schemas.operations import (
    AddMemberArgs,
    CreateTaskArgs,
    CreateTeamArgs,
    GetUserArgs,
    OperationCall,
    OperationRequest,
    SearchTasksArgs,
    TaskKeyArgs,
    TeamScopedArgs,
    UpdateTaskArgs,
    UpdateTaskDetailsArgs,
)
from teamtasks.schemas.responses import (
    DeleteTaskResponse,
    MembershipResponse,
    TaskResponse,
    TeamResponse,
    UserResponse,
)

__all__ = [
    "AddMemberArgs",
    "CreateTaskArgs",
    "CreateTeamArgs",
    "GetUserArgs",
    "OperationCall",
    "OperationRequest",
    "SearchTasksArgs",
    "TaskKeyArgs",
    "TeamScopedArgs",
    "UpdateTaskArgs",
    "UpdateTaskDetailsArgs",
    "DeleteTaskResponse",
    "MembershipResponse",
    "TaskResponse",
    "TeamResponse",
    "UserResponse",
]
