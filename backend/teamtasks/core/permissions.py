"""
Team Access Policy

Central table of which relationship to a team each operation requires.
The checks themselves live in teamtasks.services.authorization.
"""

from typing import Dict


class Operations:
    """All operation names accepted by the resolver."""

    CREATE_TEAM = "createTeam"
    ADD_MEMBER = "addMember"
    CREATE_TASK = "createTask"
    UPDATE_TASK = "updateTask"
    UPDATE_TASK_DETAILS = "updateTaskDetails"
    DELETE_TASK = "deleteTask"
    LIST_TEAMS = "listTeams"
    LIST_TASKS = "listTasks"
    SEARCH_TASKS = "searchTasks"
    LIST_MEMBERS = "listMembers"
    GET_USER = "getUser"


class Access:
    """Relationship a caller must have to the target team."""

    # Any authenticated identity, no team scoping
    AUTHENTICATED = "authenticated"
    # Any membership row in the team
    MEMBER = "member"
    # Membership with role admin
    ADMIN = "admin"
    # The task's current assignee, or an admin
    ASSIGNEE_OR_ADMIN = "assignee_or_admin"


OPERATION_POLICY: Dict[str, str] = {
    Operations.CREATE_TEAM: Access.AUTHENTICATED,
    Operations.ADD_MEMBER: Access.ADMIN,
    Operations.CREATE_TASK: Access.ADMIN,
    Operations.UPDATE_TASK: Access.ASSIGNEE_OR_ADMIN,
    Operations.UPDATE_TASK_DETAILS: Access.ADMIN,
    Operations.DELETE_TASK: Access.ADMIN,
    Operations.LIST_TEAMS: Access.AUTHENTICATED,
    Operations.LIST_TASKS: Access.MEMBER,
    Operations.SEARCH_TASKS: Access.MEMBER,
    Operations.LIST_MEMBERS: Access.MEMBER,
    Operations.GET_USER: Access.AUTHENTICATED,
}

ALL_OPERATIONS = list(OPERATION_POLICY)

# Wording used in AuthorizationError messages
ACTION_DESCRIPTIONS: Dict[str, str] = {
    Operations.ADD_MEMBER: "add members",
    Operations.CREATE_TASK: "create tasks",
    Operations.UPDATE_TASK: "update tasks",
    Operations.UPDATE_TASK_DETAILS: "update task details",
    Operations.DELETE_TASK: "delete tasks",
    Operations.LIST_TASKS: "list tasks",
    Operations.SEARCH_TASKS: "search tasks",
    Operations.LIST_MEMBERS: "list members",
}


def required_access(operation: str) -> str:
    """Look up the access level an operation needs."""
    return OPERATION_POLICY[operation]


def describe_action(operation: str) -> str:
    return ACTION_DESCRIPTIONS.get(operation, operation)
