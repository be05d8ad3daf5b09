import uuid
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from golf_intranet.models.join_person import JoinPersonStatus, JoinType
from golf_intranet.schemas.course_time import CourseTimeResponse


# 영문 태그(MF)와 한글 라벨(남여) 모두 허용
JoinTypeField = Annotated[JoinType, BeforeValidator(JoinType.parse)]
JoinStatusField = Annotated[JoinPersonStatus, BeforeValidator(JoinPersonStatus.parse)]


class JoinCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., min_length=1, max_length=30)
    join_type: JoinTypeField = Field(..., examples=["남"])
    # 미지정 시 코스 타임 / 매니저 기본값 사용
    green_fee: Optional[int] = Field(None, ge=0)
    charge_fee: Optional[int] = Field(None, ge=0)
    charge_rate: Optional[float] = Field(None, ge=0, le=100)


class JoinTypeUpdateRequest(BaseModel):
    join_type: JoinTypeField


class JoinStatusUpdateRequest(BaseModel):
    status: JoinStatusField = Field(..., examples=["입금완료"])
    refund_reason: Optional[str] = Field(None, max_length=255)
    refund_account: Optional[str] = Field(None, max_length=255)


class JoinPersonResponse(BaseModel):
    id: uuid.UUID
    time_id: uuid.UUID
    manager_id: Optional[uuid.UUID]
    name: str
    phone_number: str
    join_type: JoinType
    green_fee: int
    charge_fee: int
    charge_rate: float
    status: JoinPersonStatus
    refund_reason: Optional[str]
    refund_account: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JoinOccupancyResponse(BaseModel):
    join_person: JoinPersonResponse
    course_time: CourseTimeResponse


class DepositRow(BaseModel):
    join_id: uuid.UUID
    time_id: uuid.UUID
    reserved_time: datetime
    reserved_name: str
    name: str
    phone_number: str
    join_type: JoinType
    green_fee: int
    charge_fee: int
    status: JoinPersonStatus
