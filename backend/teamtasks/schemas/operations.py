"""
Request shapes for the operation resolver.

Arguments arrive in the GraphQL-style camelCase of the web client; every
field is optional at this layer so that the domain validators can report
missing values with their own messages.
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OperationArguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class OperationRequest(BaseModel):
    """One call into the resolver: operation name, its arguments and the caller's claims."""

    operation: Optional[str] = None
    arguments: Dict[str, Any] = Field(default_factory=dict)
    identity: Optional[Dict[str, Any]] = None


class OperationCall(BaseModel):
    """HTTP body; the identity comes from the verified bearer token instead."""

    operation: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class CreateTeamArgs(OperationArguments):
    name: Optional[str] = None


class AddMemberArgs(OperationArguments):
    team_id: Optional[str] = None
    email: Optional[str] = None


class TeamScopedArgs(OperationArguments):
    team_id: Optional[str] = None


class TaskKeyArgs(OperationArguments):
    team_id: Optional[str] = None
    task_id: Optional[str] = None


class CreateTaskArgs(OperationArguments):
    team_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    priority: Optional[str] = None
    deadline: Optional[str] = None


class UpdateTaskArgs(TaskKeyArgs):
    status: Optional[str] = None


class UpdateTaskDetailsArgs(TaskKeyArgs):
    """
    Partial update of task details.

    A field counts as supplied when its key was present in the request, even
    when its value is null (used to clear assignedTo or deadline).
    """

    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    deadline: Optional[str] = None
    priority: Optional[str] = None

    def supplied_fields(self) -> Dict[str, Optional[str]]:
        """Updatable fields that were explicitly present, keyed by field name."""
        return {
            name: getattr(self, name)
            for name in UPDATABLE_TASK_FIELDS
            if name in self.model_fields_set
        }


UPDATABLE_TASK_FIELDS = ("title", "description", "assigned_to", "deadline", "priority")


class SearchTasksArgs(TeamScopedArgs):
    query: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("query", "term", "searchTerm"),
    )


class GetUserArgs(OperationArguments):
    user_id: Optional[str] = None
