from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from cyclestore.schemas.common import Envelope


Role = Literal["admin", "user"]


class Identity(BaseModel):
    """Claims carried by an access token: who is calling and with which role."""

    id: int
    email: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginRequest(BaseModel):
    # Presence and format are checked by the login service to report precise messages
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(Envelope):
    token: str
    user: Identity


class MeUser(BaseModel):
    id: int
    email: str
    name: str
    role: Role
    created_at: datetime

    class Config:
        from_attributes = True


class MeResponse(Envelope):
    user: MeUser
