"""
Shared Constants

Centralized constants used across the application to ensure consistency.
"""

from typing import Dict, List, Optional, Tuple

# =============================================================================
# Identity
# =============================================================================

# Claim names tried, in order, when deriving a user id from an identity bag.
# Membership rows are keyed by the id this order produces, so every caller
# that derives a user id (including the web client) must use the same order.
USER_ID_CLAIMS: Tuple[str, ...] = (
    "sub",
    "username",
    "cognito:username",
    "email",
    "custom:email",
)

# =============================================================================
# Team Roles
# =============================================================================

TEAM_ROLE_ADMIN = "admin"
TEAM_ROLE_MEMBER = "member"

# Admins are listed before members
TEAM_ROLE_ORDER: Dict[str, int] = {
    TEAM_ROLE_ADMIN: 0,
    TEAM_ROLE_MEMBER: 1,
}

# =============================================================================
# Tasks
# =============================================================================

TASK_STATUS_NOT_STARTED = "Not Started"
TASK_STATUS_IN_PROGRESS = "In Progress"
TASK_STATUS_COMPLETED = "Completed"

TASK_STATUSES: List[str] = [
    TASK_STATUS_NOT_STARTED,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_COMPLETED,
]

TASK_PRIORITY_LOW = "Low"
TASK_PRIORITY_MEDIUM = "Medium"
TASK_PRIORITY_HIGH = "High"

TASK_PRIORITIES: List[str] = [
    TASK_PRIORITY_LOW,
    TASK_PRIORITY_MEDIUM,
    TASK_PRIORITY_HIGH,
]

DEFAULT_TASK_STATUS = TASK_STATUS_NOT_STARTED
DEFAULT_TASK_PRIORITY = TASK_PRIORITY_MEDIUM

# Priority order for sorting (higher value = more urgent)
PRIORITY_ORDER: Dict[str, int] = {
    TASK_PRIORITY_HIGH: 3,
    TASK_PRIORITY_MEDIUM: 2,
    TASK_PRIORITY_LOW: 1,
}


def get_priority_value(priority: Optional[str]) -> int:
    """Get numeric value for priority. Unknown or missing counts as Medium."""
    if not priority:
        return PRIORITY_ORDER[TASK_PRIORITY_MEDIUM]
    return PRIORITY_ORDER.get(priority, PRIORITY_ORDER[TASK_PRIORITY_MEDIUM])


# =============================================================================
# Field Bounds
# =============================================================================

TEAM_NAME_MIN_LENGTH = 1
TEAM_NAME_MAX_LENGTH = 100

TASK_TITLE_MIN_LENGTH = 1
TASK_TITLE_MAX_LENGTH = 200

TASK_DESCRIPTION_MIN_LENGTH = 1
TASK_DESCRIPTION_MAX_LENGTH = 1000

SEARCH_TERM_MIN_LENGTH = 1

# =============================================================================
# Notification Actions
# =============================================================================

ACTION_TEAM_CREATED = "team_created"
ACTION_TEAM_INVITATION = "team_invitation"
ACTION_TASK_ASSIGNED = "task_assigned"
ACTION_TASK_STATUS_UPDATED = "task_status_updated"
ACTION_TASK_DELETED = "task_deleted"
