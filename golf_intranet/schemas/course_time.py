import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from golf_intranet.models.course_time import CourseTimeStatus, Requirements


class CourseTimeCreateRequest(BaseModel):
    course_id: Optional[uuid.UUID] = None
    site_id: Optional[uuid.UUID] = None
    reserved_time: datetime = Field(..., examples=["2026-10-20T07:30:00"])
    reserved_name: str = Field(..., min_length=1, max_length=50)
    green_fee: int = Field(0, ge=0, examples=[180000])
    charge_fee: int = Field(0, ge=0, examples=[20000])
    requirements: Requirements = Requirements.NONE
    flag: int = 0
    memo: Optional[str] = Field(None, max_length=500)


# join_num / status 는 좌석 처리 API 로만 변경
class CourseTimeUpdateRequest(BaseModel):
    course_id: Optional[uuid.UUID] = None
    site_id: Optional[uuid.UUID] = None
    reserved_time: Optional[datetime] = None
    reserved_name: Optional[str] = Field(None, min_length=1, max_length=50)
    green_fee: Optional[int] = Field(None, ge=0)
    charge_fee: Optional[int] = Field(None, ge=0)
    requirements: Optional[Requirements] = None
    flag: Optional[int] = None
    memo: Optional[str] = Field(None, max_length=500)


class CourseTimeResponse(BaseModel):
    id: uuid.UUID
    author_id: Optional[uuid.UUID]
    course_id: Optional[uuid.UUID]
    site_id: Optional[uuid.UUID]
    reserved_time: datetime
    reserved_name: str
    green_fee: int
    charge_fee: int
    requirements: Requirements
    flag: int
    memo: Optional[str]
    status: CourseTimeStatus
    join_num: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
