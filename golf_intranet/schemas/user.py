from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from golf_intranet.models.user import UserType


# 관리자 사용자 생성 요청
class UserCreateRequest(BaseModel):
    phone_number: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=8, max_length=64)
    name: str = Field(..., min_length=1, max_length=50)
    type: UserType = UserType.MANAGER
    charge_rate: float = Field(0.0, ge=0, le=100)


# 관리자 사용자 수정 요청 (보낸 필드만 반영)
class UserUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=50)
    type: UserType | None = None
    charge_rate: float | None = Field(None, ge=0, le=100)
    password: str | None = Field(None, min_length=8, max_length=64)


class UserResponse(BaseModel):
    id: UUID
    phone_number: str
    name: str
    type: UserType
    charge_rate: float

    model_config = ConfigDict(from_attributes=True)
