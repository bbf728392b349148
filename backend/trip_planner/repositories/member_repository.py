"""Member repository - read access to registered members"""

from typing import Optional

from sqlmodel import Session, select

from trip_planner.models.member import Member


class MemberRepository:
    """Repository for member lookups"""

    @staticmethod
    def find_by_user_id(session: Session, user_id: str) -> Optional[Member]:
        return session.exec(select(Member).where(Member.user_id == user_id)).first()
