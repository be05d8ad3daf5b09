import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from golf_intranet.models.course import Region


class CourseCreateRequest(BaseModel):
    region: Region
    golf_club_name: str = Field(..., min_length=1, max_length=100)
    course_name: str = Field(..., min_length=1, max_length=100)


class CourseUpdateRequest(BaseModel):
    region: Region | None = None
    golf_club_name: str | None = Field(None, min_length=1, max_length=100)
    course_name: str | None = Field(None, min_length=1, max_length=100)


class CourseResponse(BaseModel):
    id: uuid.UUID
    region: Region
    golf_club_name: str
    course_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SiteIdCreateRequest(BaseModel):
    site_id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)
    disabled: bool = False
    hidden: bool = False


class SiteIdUpdateRequest(BaseModel):
    site_id: str | None = Field(None, min_length=1, max_length=100)
    name: str | None = Field(None, min_length=1, max_length=100)
    disabled: bool | None = None
    hidden: bool | None = None


class SiteIdResponse(BaseModel):
    id: uuid.UUID
    site_id: str
    name: str
    disabled: bool
    hidden: bool

    model_config = ConfigDict(from_attributes=True)
