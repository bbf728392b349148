"""Schedule repository - Database operations for schedules and their route lists"""

from enum import Enum
from typing import Optional

from sqlalchemy import delete, func
from sqlmodel import Session, col, select

from trip_planner.models.member import Member
from trip_planner.models.travel_attendee import AttendeePermission, ScheduleAction, TravelAttendee
from trip_planner.models.travel_route import TravelRoute
from trip_planner.models.travel_schedule import TravelSchedule
from trip_planner.utils.pagination import Page, PageWindow
from trip_planner.utils.sql import LIKE_ESCAPE, contains_pattern, count_rows


class ScheduleListMode(str, Enum):
    ALL = "ALL"  # every schedule the member attends
    SHARED = "SHARED"  # ...that has more than one attendee
    EDITABLE = "EDITABLE"  # ...where the member's permission allows editing


class ScheduleRepository:
    """Repository for schedule database operations"""

    @staticmethod
    def find_by_id(session: Session, schedule_id: int) -> Optional[TravelSchedule]:
        return session.get(TravelSchedule, schedule_id)

    @staticmethod
    def save(session: Session, schedule: TravelSchedule) -> TravelSchedule:
        """Stage a schedule and flush so it gets its id"""
        session.add(schedule)
        session.flush()
        return schedule

    @staticmethod
    def delete(session: Session, schedule: TravelSchedule) -> None:
        """Delete a schedule; attendees and routes go with it (ORM cascade)"""
        session.delete(schedule)
        session.flush()

    # ------------------------------------------------------------------
    # Attending-member queries
    # ------------------------------------------------------------------

    @staticmethod
    def _attending_query(user_id: str, mode: ScheduleListMode, keyword: Optional[str] = None):
        statement = (
            select(TravelSchedule)
            .join(TravelAttendee, col(TravelAttendee.schedule_id) == col(TravelSchedule.id))
            .join(Member, col(Member.id) == col(TravelAttendee.member_id))
            .where(Member.user_id == user_id)
        )

        if mode == ScheduleListMode.SHARED:
            shared_ids = (
                select(TravelAttendee.schedule_id)
                .group_by(col(TravelAttendee.schedule_id))
                .having(func.count(col(TravelAttendee.id)) > 1)
            )
            statement = statement.where(col(TravelSchedule.id).in_(shared_ids))
        elif mode == ScheduleListMode.EDITABLE:
            editable = [permission.value for permission in AttendeePermission.allowing(ScheduleAction.EDIT)]
            statement = statement.where(col(TravelAttendee.permission).in_(editable))

        if keyword:
            statement = statement.where(
                col(TravelSchedule.schedule_name).ilike(contains_pattern(keyword), escape=LIKE_ESCAPE)
            )

        return statement.order_by(col(TravelSchedule.updated_at).desc(), col(TravelSchedule.id).desc())

    @staticmethod
    def find_page_by_user_id(
        session: Session,
        user_id: str,
        mode: ScheduleListMode,
        window: PageWindow,
        keyword: Optional[str] = None,
    ) -> Page[TravelSchedule]:
        """One page of the member's schedules for the mode, newest change first"""
        statement = ScheduleRepository._attending_query(user_id, mode, keyword)
        items = session.exec(statement.offset(window.offset).limit(window.size)).all()
        total = count_rows(session, statement)
        return Page(items=list(items), window=window, total_elements=total)

    @staticmethod
    def count_by_user_id(
        session: Session, user_id: str, mode: ScheduleListMode, keyword: Optional[str] = None
    ) -> int:
        """Size of the whole result set for the mode, independent of any page window"""
        return count_rows(session, ScheduleRepository._attending_query(user_id, mode, keyword))

    # ------------------------------------------------------------------
    # Route list
    # ------------------------------------------------------------------

    @staticmethod
    def delete_routes(session: Session, schedule: TravelSchedule) -> int:
        """
        Delete every persisted route row of the schedule.

        Deleted rows leave the identity map ("fetch" sync) and the in-memory
        collection is expired, so the next access reloads it from the table.
        """
        statement = (
            delete(TravelRoute)
            .where(col(TravelRoute.schedule_id) == schedule.id)
            .execution_options(synchronize_session="fetch")
        )
        result = session.execute(statement)
        session.expire(schedule, ["routes"])
        return result.rowcount or 0

    @staticmethod
    def find_routes_page(session: Session, schedule_id: int, window: PageWindow) -> Page[TravelRoute]:
        statement = (
            select(TravelRoute)
            .where(TravelRoute.schedule_id == schedule_id)
            .order_by(col(TravelRoute.route_order))
        )
        items = session.exec(statement.offset(window.offset).limit(window.size)).all()
        return Page(items=list(items), window=window, total_elements=count_rows(session, statement))
