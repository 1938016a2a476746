"""
Task Repository

Tasks are partitioned by team_id; every lookup is scoped to the team.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from teamtasks.models.task import Task
from teamtasks.repositories.base import BaseRepository


def _task_key(team_id: str, task_id: str) -> Dict[str, Any]:
    return {"_id": task_id, "team_id": team_id}


class TaskRepository(BaseRepository[Task]):
    """Repository for task database operations."""

    collection_name = "tasks"
    model_class = Task

    async def get(self, team_id: str, task_id: str) -> Optional[Task]:
        return await self.find_one(_task_key(team_id, task_id))

    async def list_for_team(self, team_id: str) -> List[Task]:
        return await self.find_many({"team_id": team_id})

    async def update_if_unchanged(
        self,
        team_id: str,
        task_id: str,
        update_data: Dict[str, Any],
        last_updated_at: datetime,
    ) -> Task:
        """
        Apply update_data only if the task still exists and has not been
        modified since it was read.

        Raises:
            ConditionalWriteError: If the task is gone or was modified
        """
        return await self.update_where(
            _task_key(team_id, task_id),
            update_data,
            precondition={"updated_at": last_updated_at},
        )

    async def delete(self, team_id: str, task_id: str) -> bool:
        return await self.delete_where(_task_key(team_id, task_id))
