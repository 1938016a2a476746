"""Tests for domain models and their MongoDB mapping."""

from datetime import datetime, timezone

from bson import ObjectId

from teamtasks.models.membership import Membership, membership_key
from teamtasks.models.task import Task
from teamtasks.models.team import Team
from teamtasks.models.user import User


class TestTeam:
    def test_generates_unique_ids(self):
        a = Team(name="A", admin_id="u1")
        b = Team(name="B", admin_id="u1")
        assert a.id != b.id

    def test_dumps_id_as_mongo_key(self):
        team = Team(id="team-1", name="A", admin_id="u1")
        doc = team.model_dump(by_alias=True)
        assert doc["_id"] == "team-1"
        assert "id" not in doc

    def test_loads_from_mongo_document(self):
        team = Team(**{"_id": "team-1", "name": "A", "admin_id": "u1", "created_at": datetime(2026, 1, 1)})
        assert team.id == "team-1"
        # Naive datetimes from MongoDB are treated as UTC
        assert team.created_at.tzinfo == timezone.utc

    def test_objectid_converted_to_str(self):
        oid = ObjectId()
        team = Team(**{"_id": oid, "name": "A", "admin_id": "u1"})
        assert team.id == str(oid)


class TestMembership:
    def test_key_is_derived(self):
        membership = Membership(team_id="t1", user_id="bob@example.com")
        assert membership.id == membership_key("t1", "bob@example.com") == "t1#bob@example.com"

    def test_defaults(self):
        membership = Membership(team_id="t1", user_id="bob")
        assert membership.role == "member"
        assert membership.added_by is None
        assert membership.joined_at.tzinfo is not None

    def test_round_trips_through_document(self):
        membership = Membership(team_id="t1", user_id="bob", role="admin")
        loaded = Membership(**membership.model_dump(by_alias=True))
        assert loaded == membership


class TestTask:
    def test_defaults(self):
        task = Task(team_id="t1", title="T", description="D", created_by="u1", updated_by="u1")
        assert task.status == "Not Started"
        assert task.priority == "Medium"
        assert task.assigned_to is None
        assert task.deadline is None


class TestUser:
    def test_optional_fields(self):
        user = User(**{"_id": "u1"})
        assert user.email is None
        assert user.created_at is None
