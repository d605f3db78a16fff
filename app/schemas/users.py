# app/schemas/users.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterUserPayload(CamelModel):
    # Rules live in app.utils.validators so every violation is reported together
    account_number: str = Field(..., description="Bank account number, 9 to 18 characters.")
    ifsc: str = Field(..., description="IFSC code of the account's branch, e.g. ABCD0123456.")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "accountNumber": "123456789",
                "ifsc": "ABCD0123456",
            }
        },
    )


class LoginPayload(CamelModel):
    account_number: str
    ifsc: str


class RegisterSuccessResponse(CamelModel):
    message: str
    user_id: UUID


class LoginResponse(BaseModel):
    token: str


class MaskedUserInfo(CamelModel):
    id: UUID
    masked_account_number: str
    ifsc_code: str
    bank_name: str
    branch: str
    address: Optional[str] = None
    city: Optional[str] = None
    state_code: Optional[str] = None
    routing_no: Optional[str] = None
    created_at: datetime


class ErrorResponse(BaseModel):
    error: str


class TokenClaims(BaseModel):
    sub: UUID
    exp: int
