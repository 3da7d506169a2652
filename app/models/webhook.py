from pydantic import BaseModel, Field
from typing import Any, List, Optional


# ---------- Envelope ----------
class WebhookEvent(BaseModel):
    type: str
    data: Any = None


# ---------- user.created / user.updated ----------
class EmailAddress(BaseModel):
    email: str


class UserEventPayload(BaseModel):
    id: str
    first_name: str
    last_name: str
    image_url: str
    email_addresses: List[EmailAddress]
    username: str


# ---------- user.deleted ----------
class DeletedUserPayload(BaseModel):
    id: Optional[str] = None


# ---------- Route response ----------
class WebhookResult(BaseModel):
    status: str
    message: str
    event_type: Optional[str] = Field(default=None)
