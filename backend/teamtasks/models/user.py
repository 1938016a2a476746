from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamtasks.models.types import PyObjectId, UTCDateTime


class User(BaseModel):
    """Informational user projection. Never used for authorization."""

    id: PyObjectId = Field(validation_alias="_id", serialization_alias="_id")
    email: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[UTCDateTime] = None

    model_config = ConfigDict(populate_by_name=True)
