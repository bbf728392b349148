from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class ChatMessage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # No foreign key: messages live in the chat store, keyed by schedule id only
    schedule_id: int = Field(index=True)
    sender_user_id: str
    message: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
