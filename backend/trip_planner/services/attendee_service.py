"""
Attendee Manager

Owns the attendee lifecycle on a schedule:
- sharing a schedule adds a GUEST (author only)
- a guest may leave; the author may not (deleting the schedule is the only
  way to end authorship)

Role decides sharing and leaving. Permission is never consulted here.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from trip_planner.database import atomic
from trip_planner.models.travel_attendee import AttendeePermission, AttendeeRole, TravelAttendee
from trip_planner.repositories.attendee_repository import AttendeeRepository
from trip_planner.repositories.member_repository import MemberRepository
from trip_planner.repositories.schedule_repository import ScheduleRepository
from trip_planner.services.errors import AlreadyAttendeeError, DataNotFoundError, ErrorCode, ForbiddenScheduleError

logger = logging.getLogger(__name__)


@dataclass
class AttendeeInfo:
    user_id: str
    nickname: str
    profile_url: Optional[str]
    role: AttendeeRole
    permission: AttendeePermission


class AttendeeService:
    """Service layer for attendee business logic"""

    def __init__(self, session: Session):
        self.session = session
        self.attendees = AttendeeRepository()
        self.schedules = ScheduleRepository()
        self.members = MemberRepository()

    def create_attendee(
        self, schedule_id: int, user_id: str, guest_user_id: str, permission: AttendeePermission
    ) -> TravelAttendee:
        """
        Share a schedule with another member as a GUEST.

        Raises:
            DataNotFoundError(SCHEDULE_NOT_FOUND): schedule does not exist
            ForbiddenScheduleError(FORBIDDEN_SHARE_ATTENDEE): requester is not the author
            DataNotFoundError(USER_NOT_FOUND): guest is not a registered member
            AlreadyAttendeeError: guest already attends the schedule
        """
        with atomic(self.session):
            schedule = self.schedules.find_by_id(self.session, schedule_id)
            if not schedule:
                raise DataNotFoundError(ErrorCode.SCHEDULE_NOT_FOUND)

            if not self.attendees.exists_by_schedule_user_and_role(
                self.session, schedule_id, user_id, AttendeeRole.AUTHOR
            ):
                logger.warning("User %s tried to share schedule %s without being its author", user_id, schedule_id)
                raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_SHARE_ATTENDEE)

            guest = self.members.find_by_user_id(self.session, guest_user_id)
            if not guest:
                raise DataNotFoundError(ErrorCode.USER_NOT_FOUND)

            if self.attendees.exists_by_schedule_and_user(self.session, schedule_id, guest.user_id):
                raise AlreadyAttendeeError()

            attendee = TravelAttendee(
                schedule_id=schedule.id,
                member_id=guest.id,
                role=AttendeeRole.GUEST,
                permission=permission,
            )
            try:
                self.attendees.save(self.session, attendee)
            except IntegrityError as e:
                # A concurrent share of the same member won the unique constraint
                raise AlreadyAttendeeError() from e

        logger.info(
            "Schedule %s shared by %s with %s (permission %s)",
            schedule_id,
            user_id,
            guest_user_id,
            AttendeePermission(permission).value,
        )
        return attendee

    def remove_attendee(self, schedule_id: int, user_id: str) -> None:
        """
        Leave a schedule as a guest.

        A non-attendee gets the same FORBIDDEN_ACCESS_SCHEDULE as any other
        access failure, so the call does not reveal whether the schedule exists.

        Raises:
            ForbiddenScheduleError(FORBIDDEN_ACCESS_SCHEDULE): user does not attend the schedule
            ForbiddenScheduleError(FORBIDDEN_REMOVE_ATTENDEE): user is the author
        """
        with atomic(self.session):
            attendee = self.attendees.find_by_schedule_and_user(self.session, schedule_id, user_id)
            if not attendee:
                raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_ACCESS_SCHEDULE)

            if attendee.is_author:
                logger.warning("Author %s tried to leave schedule %s", user_id, schedule_id)
                raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_REMOVE_ATTENDEE)

            self.attendees.delete(self.session, attendee)

        logger.info("User %s left schedule %s", user_id, schedule_id)

    def require_attendee(self, schedule_id: int, user_id: str) -> TravelAttendee:
        """Return the caller's attendee row or raise FORBIDDEN_ACCESS_SCHEDULE"""
        attendee = self.attendees.find_by_schedule_and_user(self.session, schedule_id, user_id)
        if not attendee:
            raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_ACCESS_SCHEDULE)
        return attendee

    def get_attendees(self, schedule_id: int, user_id: str) -> List[AttendeeInfo]:
        """Attendees of a schedule, author first, then in join order. Caller must attend."""
        self.require_attendee(schedule_id, user_id)

        attendees = self.attendees.find_all_by_schedule(self.session, schedule_id)
        attendees.sort(key=lambda a: (not AttendeeRole(a.role).is_author, a.id))

        return [
            AttendeeInfo(
                user_id=a.member.user_id,
                nickname=a.member.nickname,
                profile_url=a.member.profile_image_url,
                role=AttendeeRole(a.role),
                permission=AttendeePermission(a.permission),
            )
            for a in attendees
        ]
