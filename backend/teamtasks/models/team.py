import uuid

from pydantic import BaseModel, ConfigDict, Field

from teamtasks.core import utc_now
from teamtasks.models.types import PyObjectId, UTCDateTime


class Team(BaseModel):
    # validation_alias="_id": accepts _id from MongoDB
    # serialization_alias="_id": model_dump(by_alias=True) outputs _id for MongoDB
    id: PyObjectId = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias="_id",
        serialization_alias="_id",
    )
    name: str
    admin_id: str
    created_at: UTCDateTime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True)
