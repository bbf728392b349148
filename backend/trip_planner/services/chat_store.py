"""Chat store adapter: messages are keyed by schedule id only."""

import logging
from typing import List

from sqlalchemy import delete
from sqlmodel import Session, col, select

from trip_planner.models.chat_message import ChatMessage

logger = logging.getLogger(__name__)


class ChatStore:
    def __init__(self, session: Session):
        self.session = session

    def find_chat_messages(self, schedule_id: int) -> List[ChatMessage]:
        return list(
            self.session.exec(
                select(ChatMessage).where(ChatMessage.schedule_id == schedule_id).order_by(col(ChatMessage.id))
            ).all()
        )

    def delete_chat_messages(self, schedule_id: int) -> int:
        """Bulk delete every message of the schedule. Returns the number of rows removed."""
        result = self.session.execute(delete(ChatMessage).where(col(ChatMessage.schedule_id) == schedule_id))
        deleted = result.rowcount or 0
        logger.info("Deleted %d chat messages of schedule %s", deleted, schedule_id)
        return deleted
