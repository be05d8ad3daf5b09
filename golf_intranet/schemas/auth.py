from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    phone_number: str = Field(..., min_length=1, examples=["010-1234-5678"])
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
