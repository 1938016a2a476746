import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamtasks.core import utc_now
from teamtasks.core.constants import DEFAULT_TASK_PRIORITY, DEFAULT_TASK_STATUS
from teamtasks.models.types import PyObjectId, UTCDateTime


class Task(BaseModel):
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    team_id: str
    title: str
    description: str
    assigned_to: Optional[str] = None
    status: str = DEFAULT_TASK_STATUS
    priority: str = DEFAULT_TASK_PRIORITY
    # ISO date or timestamp as supplied by the caller
    deadline: Optional[str] = None
    created_by: str
    created_at: UTCDateTime = Field(default_factory=utc_now)
    updated_at: UTCDateTime = Field(default_factory=utc_now)
    updated_by: str

    model_config = ConfigDict(populate_by_name=True)
