from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from cyclestore.schemas.common import Envelope


class PostWrite(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostOut(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    author_name: str
    author_email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostResponse(Envelope):
    post: PostOut


class PostListResponse(Envelope):
    count: int
    posts: List[PostOut]
