from datetime import datetime
from typing import Any

from pydantic import BaseModel


# Presence of email/password/name is checked by the service so a missing
# field answers with the portal's own 400 message.
class SignupRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None
    department: str | None = None
    contact: str | None = None


class SigninRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: str
    email: str
    user_metadata: dict[str, Any] = {}
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None

    model_config = {"from_attributes": True}


class MentorProfile(BaseModel):
    id: str
    email: str
    name: str
    department: str | None = None
    contact: str | None = None
    created_at: str


class SignupResponse(BaseModel):
    message: str
    user: UserOut


class SigninResponse(BaseModel):
    message: str
    user: UserOut
    access_token: str
    mentor: MentorProfile | None = None
