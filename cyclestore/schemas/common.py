from typing import Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    """Fields shared by every response body; payload keys sit next to them."""

    error: bool = False
    message: Optional[str] = None


class MessageResponse(Envelope):
    pass
