"""Tests for the MongoDB repositories using mocked Motor collections."""

import asyncio
from datetime import datetime, timezone

import pytest
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from teamtasks.models.membership import Membership
from teamtasks.models.team import Team
from teamtasks.repositories import (
    ConditionalWriteError,
    MembershipRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)
from tests.mocks.factories import make_task
from tests.mocks.mongodb import create_mock_collection, create_mock_db, create_mock_session

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _task_doc(**overrides):
    doc = make_task().model_dump(by_alias=True)
    doc.update(overrides)
    return doc


class TestMembershipRepository:
    def test_get_uses_composite_key(self):
        collection = create_mock_collection(find_one=None)
        repo = MembershipRepository(create_mock_db({"memberships": collection}))

        result = asyncio.run(repo.get("team-1", "bob@example.com"))

        assert result is None
        collection.find_one.assert_called_once_with({"_id": "team-1#bob@example.com"})

    def test_list_for_user(self):
        doc = Membership(team_id="team-1", user_id="bob").model_dump(by_alias=True)
        collection = create_mock_collection(find=[doc])
        repo = MembershipRepository(create_mock_db({"memberships": collection}))

        result = asyncio.run(repo.list_for_user("bob"))

        collection.find.assert_called_once_with({"user_id": "bob"})
        collection.find.return_value.sort.assert_not_called()
        assert [m.team_id for m in result] == ["team-1"]

    def test_create_duplicate_is_conditional_failure(self):
        collection = create_mock_collection()
        collection.insert_one.side_effect = DuplicateKeyError("dup")
        repo = MembershipRepository(create_mock_db({"memberships": collection}))

        with pytest.raises(ConditionalWriteError):
            asyncio.run(repo.create(Membership(team_id="team-1", user_id="bob")))


class TestTaskRepository:
    def test_get_is_scoped_to_team(self):
        collection = create_mock_collection(find_one=_task_doc())
        repo = TaskRepository(create_mock_db({"tasks": collection}))

        task = asyncio.run(repo.get("team-1", "task-1"))

        collection.find_one.assert_called_once_with({"_id": "task-1", "team_id": "team-1"})
        assert task.title == "Fix bug"

    def test_update_if_unchanged_sends_precondition(self):
        updated = _task_doc(status="Completed")
        collection = create_mock_collection(find_one_and_update=updated)
        repo = TaskRepository(create_mock_db({"tasks": collection}))

        result = asyncio.run(
            repo.update_if_unchanged("team-1", "task-1", {"status": "Completed"}, last_updated_at=CREATED)
        )

        assert result.status == "Completed"
        collection.find_one_and_update.assert_called_once_with(
            {"_id": "task-1", "team_id": "team-1", "updated_at": CREATED},
            {"$set": {"status": "Completed"}},
            return_document=ReturnDocument.AFTER,
        )

    def test_update_if_unchanged_raises_when_no_match(self):
        collection = create_mock_collection(find_one_and_update=None)
        repo = TaskRepository(create_mock_db({"tasks": collection}))

        with pytest.raises(ConditionalWriteError):
            asyncio.run(repo.update_if_unchanged("team-1", "task-1", {"status": "Completed"}, CREATED))

    def test_delete_reports_missing(self):
        collection = create_mock_collection(deleted_count=0)
        repo = TaskRepository(create_mock_db({"tasks": collection}))

        assert asyncio.run(repo.delete("team-1", "task-1")) is False
        collection.delete_one.assert_called_once_with({"_id": "task-1", "team_id": "team-1"})


class TestTeamRepository:
    def test_create_with_admin_writes_both_in_one_session(self):
        teams = create_mock_collection()
        memberships = create_mock_collection()
        session = create_mock_session()
        db = create_mock_db({"teams": teams, "memberships": memberships}, session=session)
        repo = TeamRepository(db)
        team = Team(id="team-1", name="Alpha", admin_id="alice", created_at=CREATED)
        membership = Membership(team_id="team-1", user_id="alice", role="admin", joined_at=CREATED)

        asyncio.run(repo.create_with_admin(team, membership))

        session.start_transaction.assert_called_once()
        assert teams.insert_one.call_args.kwargs["session"] is session
        assert memberships.insert_one.call_args.kwargs["session"] is session
        assert memberships.insert_one.call_args.args[0]["_id"] == "team-1#alice"

    def test_create_with_admin_duplicate_is_conditional_failure(self):
        teams = create_mock_collection()
        memberships = create_mock_collection()
        memberships.insert_one.side_effect = DuplicateKeyError("dup")
        repo = TeamRepository(create_mock_db({"teams": teams, "memberships": memberships}))
        team = Team(id="team-1", name="Alpha", admin_id="alice")
        membership = Membership(team_id="team-1", user_id="alice", role="admin")

        with pytest.raises(ConditionalWriteError):
            asyncio.run(repo.create_with_admin(team, membership))


class TestUserRepository:
    def test_get(self):
        collection = create_mock_collection(find_one={"_id": "alice", "email": "alice@example.com"})
        repo = UserRepository(create_mock_db({"users": collection}))

        user = asyncio.run(repo.get("alice"))

        assert user.email == "alice@example.com"
        collection.find_one.assert_called_once_with({"_id": "alice"})
