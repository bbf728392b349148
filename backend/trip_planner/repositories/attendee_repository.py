"""Attendee repository - Database operations for schedule attendees"""

from typing import List, Optional

from sqlmodel import Session, col, select

from trip_planner.models.member import Member
from trip_planner.models.travel_attendee import AttendeeRole, TravelAttendee


class AttendeeRepository:
    """Repository for attendee database operations"""

    @staticmethod
    def _by_schedule_and_user(schedule_id: int, user_id: str):
        return (
            select(TravelAttendee)
            .join(Member, col(Member.id) == col(TravelAttendee.member_id))
            .where(TravelAttendee.schedule_id == schedule_id, Member.user_id == user_id)
        )

    @staticmethod
    def find_by_schedule_and_user(session: Session, schedule_id: int, user_id: str) -> Optional[TravelAttendee]:
        """The attendee row of one member on one schedule"""
        return session.exec(AttendeeRepository._by_schedule_and_user(schedule_id, user_id)).first()

    @staticmethod
    def exists_by_schedule_and_user(session: Session, schedule_id: int, user_id: str) -> bool:
        return AttendeeRepository.find_by_schedule_and_user(session, schedule_id, user_id) is not None

    @staticmethod
    def exists_by_schedule_user_and_role(session: Session, schedule_id: int, user_id: str, role: AttendeeRole) -> bool:
        statement = AttendeeRepository._by_schedule_and_user(schedule_id, user_id).where(
            col(TravelAttendee.role) == role.value
        )
        return session.exec(statement).first() is not None

    @staticmethod
    def find_all_by_schedule(session: Session, schedule_id: int) -> List[TravelAttendee]:
        """All attendees of a schedule in join order"""
        return list(
            session.exec(
                select(TravelAttendee)
                .where(TravelAttendee.schedule_id == schedule_id)
                .order_by(col(TravelAttendee.id))
            ).all()
        )

    @staticmethod
    def save(session: Session, attendee: TravelAttendee) -> TravelAttendee:
        """Stage an attendee and flush so constraint violations surface here"""
        session.add(attendee)
        session.flush()
        return attendee

    @staticmethod
    def delete(session: Session, attendee: TravelAttendee) -> None:
        session.delete(attendee)
        session.flush()
