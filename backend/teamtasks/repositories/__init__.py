"""
Repository Pattern for Database Access

Provides a clean abstraction layer over MongoDB collections,
centralizing database operations and reducing code duplication.
"""

from teamtasks.repositories.base import BaseRepository, ConditionalWriteError
from teamtasks.repositories.memberships import MembershipRepository
from teamtasks.repositories.tasks import TaskRepository
from teamtasks.repositories.teams import TeamRepository
from teamtasks.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "ConditionalWriteError",
    "MembershipRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
]
