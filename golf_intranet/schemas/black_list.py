import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BlackListCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., min_length=1, max_length=30)
    reason: str = Field(..., min_length=1, max_length=500)


class BlackListResponse(BaseModel):
    id: uuid.UUID
    author_id: Optional[uuid.UUID]
    name: str
    phone_number: str
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
