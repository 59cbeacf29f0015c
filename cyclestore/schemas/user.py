from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from cyclestore.schemas.auth import Role
from cyclestore.schemas.common import Envelope


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    role: Role
    created_at: datetime

    class Config:
        from_attributes = True


class UpdateUserRoleRequest(BaseModel):
    # Any string is accepted here so an unknown role is reported as a validation message
    role: Optional[str] = None


class UserResponse(Envelope):
    user: UserOut


class UserListResponse(Envelope):
    count: int
    users: List[UserOut]
