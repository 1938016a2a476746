"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any teamtasks imports to prevent
accidental connections to real databases or notification endpoints.
"""

import asyncio
import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any code imports the settings singleton
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests"
os.environ["ALGORITHM"] = "HS256"
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_team_tasks"
os.environ["NOTIFICATION_WEBHOOK_URL"] = ""

import pytest  # noqa: E402

from teamtasks.api.resolver import OperationResolver  # noqa: E402
from teamtasks.services.authorization import AuthorizationService  # noqa: E402
from teamtasks.services.notifications.service import NotificationService  # noqa: E402
from teamtasks.services.tasks import TaskService  # noqa: E402
from teamtasks.services.teams import TeamService  # noqa: E402
from teamtasks.services.users import UserService  # noqa: E402
from tests.mocks.notifications import RecordingProvider  # noqa: E402
from tests.mocks.store import (  # noqa: E402
    FakeMembershipRepository,
    FakeTaskRepository,
    FakeTeamRepository,
    FakeUserRepository,
    InMemoryStore,
)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def provider():
    """Notification provider that records every delivered notification."""
    return RecordingProvider()


@pytest.fixture
def repos(store):
    return {
        "teams": FakeTeamRepository(store),
        "memberships": FakeMembershipRepository(store),
        "tasks": FakeTaskRepository(store),
        "users": FakeUserRepository(store),
    }


@pytest.fixture
def authorization(repos):
    return AuthorizationService(repos["memberships"])


@pytest.fixture
def notifications(provider):
    return NotificationService(provider)


@pytest.fixture
def team_service(repos, authorization, notifications):
    return TeamService(repos["teams"], repos["memberships"], authorization, notifications)


@pytest.fixture
def task_service(repos, authorization, notifications):
    return TaskService(repos["tasks"], repos["teams"], authorization, notifications)


@pytest.fixture
def user_service(repos):
    return UserService(repos["users"])


@pytest.fixture
def resolver(team_service, task_service, user_service):
    return OperationResolver(teams=team_service, tasks=task_service, users=user_service)


@pytest.fixture
def call(resolver):
    """Run one operation synchronously as the given user id."""
    def _call(operation, caller, **arguments):
        return asyncio.run(
            resolver.resolve(
                {
                    "operation": operation,
                    "arguments": arguments,
                    "identity": {"sub": caller} if caller else None,
                }
            )
        )

    return _call
