"""
Schedule Manager

Owns the schedule lifecycle:

    {no record} -> created (author attached) -> [updated]* -> deleted

- create: any registered member; becomes AUTHOR with permission ALL
- update: attendees whose permission allows EDIT (ALL, EDIT)
- delete: the AUTHOR only, whatever the permissions of others

Every mutating operation runs in one transaction. The route list is fully
replaced on update (delete every row, then rebuild in request order), so a
schedule never keeps stale route rows.
"""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from dotenv import load_dotenv
from sqlmodel import Session

from trip_planner.database import atomic
from trip_planner.models.travel_attendee import (
    AttendeePermission,
    AttendeeRole,
    ScheduleAction,
    TravelAttendee,
)
from trip_planner.models.travel_place import TravelPlace
from trip_planner.models.travel_route import TravelRoute
from trip_planner.models.travel_schedule import TravelSchedule
from trip_planner.repositories.attendee_repository import AttendeeRepository
from trip_planner.repositories.member_repository import MemberRepository
from trip_planner.repositories.schedule_repository import ScheduleListMode, ScheduleRepository
from trip_planner.services.chat_store import ChatStore
from trip_planner.services.errors import DataNotFoundError, ErrorCode, ForbiddenScheduleError
from trip_planner.services.place_catalog import PlaceCatalog
from trip_planner.services.summary_builder import ScheduleSummary, build_summary
from trip_planner.utils.pagination import (
    Page,
    default_window,
    schedule_modal_window,
    schedule_window,
)

load_dotenv()

logger = logging.getLogger(__name__)

# Area shown in the "add place" picker of the schedule editor
DEFAULT_PLACE_COUNTRY = os.getenv("DEFAULT_PLACE_COUNTRY", "대한민국")
DEFAULT_PLACE_CITY = os.getenv("DEFAULT_PLACE_CITY", "서울")
DEFAULT_PLACE_DISTRICT = os.getenv("DEFAULT_PLACE_DISTRICT", "중구")


@dataclass
class RouteRequest:
    route_order: int
    place_id: int


@dataclass
class SchedulePage:
    page: Page[ScheduleSummary]
    total_shared_elements: int

    @property
    def total_elements(self) -> int:
        return self.page.total_elements


@dataclass
class ScheduleDetail:
    schedule: TravelSchedule
    routes: List[TravelRoute]
    attendees: List[TravelAttendee]
    places: Page[TravelPlace]


def check_edit_permission(attendee: TravelAttendee) -> None:
    """Permission gate for changing a schedule's content (ALL or EDIT)."""
    if not attendee.can(ScheduleAction.EDIT):
        raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_EDIT_SCHEDULE)


def check_author_role(attendee: TravelAttendee) -> None:
    """Role gate for deleting a schedule. Permission is not consulted."""
    if not attendee.is_author:
        logger.warning("Guest member %s tried to delete schedule %s", attendee.member_id, attendee.schedule_id)
        raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_DELETE_SCHEDULE)


class ScheduleService:
    """Service layer for schedule business logic"""

    def __init__(self, session: Session):
        self.session = session
        self.schedules = ScheduleRepository()
        self.attendees = AttendeeRepository()
        self.members = MemberRepository()
        self.places = PlaceCatalog(session)
        self.chats = ChatStore(session)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_schedule(self, schedule_id: int) -> TravelSchedule:
        schedule = self.schedules.find_by_id(self.session, schedule_id)
        if not schedule:
            raise DataNotFoundError(ErrorCode.SCHEDULE_NOT_FOUND)
        return schedule

    def get_member_id(self, user_id: str) -> int:
        member = self.members.find_by_user_id(self.session, user_id)
        if not member:
            raise DataNotFoundError(ErrorCode.MEMBER_NOT_FOUND)
        return member.id

    def get_place(self, place_id: int) -> TravelPlace:
        place = self.places.find_place_by_id(place_id)
        if not place:
            raise DataNotFoundError(ErrorCode.PLACE_NOT_FOUND)
        return place

    def get_attendee(self, schedule: TravelSchedule, user_id: str) -> TravelAttendee:
        """The caller's attendee row on the schedule, or FORBIDDEN_ACCESS_SCHEDULE."""
        attendee = next((a for a in schedule.attendees if a.member.user_id == user_id), None)
        if attendee is None:
            raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_ACCESS_SCHEDULE)
        return attendee

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_schedule(self, schedule_name: str, start_date: date, end_date: date, user_id: str) -> int:
        """
        Create a schedule and attach the caller as its AUTHOR with permission ALL.

        The schedule row is flushed first so the author row can reference its id.

        Raises:
            DataNotFoundError(MEMBER_NOT_FOUND): caller is not a registered member
        """
        with atomic(self.session):
            now = datetime.utcnow()
            schedule = TravelSchedule(
                schedule_name=schedule_name,
                start_date=start_date,
                end_date=end_date,
                created_at=now,
                updated_at=now,
            )
            self.schedules.save(self.session, schedule)

            author = TravelAttendee(
                schedule_id=schedule.id,
                member_id=self.get_member_id(user_id),
                role=AttendeeRole.AUTHOR,
                permission=AttendeePermission.ALL,
            )
            self.attendees.save(self.session, author)
            schedule_id = schedule.id

        logger.info("User %s created schedule %s '%s'", user_id, schedule_id, schedule_name)
        return schedule_id

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_schedules(
        self,
        page: int,
        user_id: str,
        mode: ScheduleListMode = ScheduleListMode.ALL,
        keyword: Optional[str] = None,
    ) -> SchedulePage:
        """
        Page of schedule summaries the caller attends.

        total_elements counts the whole (mode, keyword) result set.
        total_shared_elements counts the SHARED result set for the same keyword
        with its own query, so it does not depend on which page is shown.

        Raises:
            DataNotFoundError(MEMBER_NOT_FOUND): caller is not a registered member
        """
        self.get_member_id(user_id)
        keyword = keyword.strip() if keyword and keyword.strip() else None

        window = schedule_modal_window(page) if mode == ScheduleListMode.EDITABLE else schedule_window(page)
        schedule_page = self.schedules.find_page_by_user_id(self.session, user_id, mode, window, keyword)

        if mode == ScheduleListMode.SHARED:
            total_shared = schedule_page.total_elements
        else:
            total_shared = self.schedules.count_by_user_id(self.session, user_id, ScheduleListMode.SHARED, keyword)

        now = datetime.utcnow()
        summaries = schedule_page.map(lambda schedule: build_summary(schedule, user_id, now))
        return SchedulePage(page=summaries, total_shared_elements=total_shared)

    def get_schedule_detail(self, schedule_id: int, page: int) -> ScheduleDetail:
        """
        Schedule core fields, its route list, its attendees and a page of
        default-area places for the "add place" picker.

        Raises:
            DataNotFoundError(SCHEDULE_NOT_FOUND): schedule does not exist
        """
        schedule = self.get_schedule(schedule_id)
        places = self._default_area_places(page)

        return ScheduleDetail(
            schedule=schedule,
            routes=list(schedule.routes or []),
            attendees=self.attendees.find_all_by_schedule(self.session, schedule.id),
            places=places,
        )

    def get_travel_places(self, schedule_id: int, page: int) -> Page[TravelPlace]:
        self.get_schedule(schedule_id)
        return self._default_area_places(page)

    def search_travel_places(self, schedule_id: int, page: int, keyword: str) -> Page[TravelPlace]:
        self.get_schedule(schedule_id)
        return self.places.search_places(keyword, default_window(page))

    def get_travel_routes(self, schedule_id: int, page: int) -> Page[TravelRoute]:
        self.get_schedule(schedule_id)
        return self.schedules.find_routes_page(self.session, schedule_id, default_window(page))

    def _default_area_places(self, page: int) -> Page[TravelPlace]:
        return self.places.find_places_by_area(
            DEFAULT_PLACE_COUNTRY, DEFAULT_PLACE_CITY, DEFAULT_PLACE_DISTRICT, default_window(page)
        )

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_schedule(
        self,
        user_id: str,
        schedule_id: int,
        schedule_name: str,
        start_date: date,
        end_date: date,
        route_requests: Optional[Sequence[RouteRequest]] = None,
    ) -> TravelSchedule:
        """
        Update name/dates and replace the route list.

        Raises:
            DataNotFoundError(SCHEDULE_NOT_FOUND): schedule does not exist
            ForbiddenScheduleError(FORBIDDEN_ACCESS_SCHEDULE): caller does not attend
            ForbiddenScheduleError(FORBIDDEN_EDIT_SCHEDULE): caller's permission is CHAT or READ
            DataNotFoundError(PLACE_NOT_FOUND): a route references an unknown place;
                nothing of the update is kept
        """
        with atomic(self.session):
            schedule = self.get_schedule(schedule_id)
            attendee = self.get_attendee(schedule, user_id)
            check_edit_permission(attendee)

            schedule.schedule_name = schedule_name
            schedule.start_date = start_date
            schedule.end_date = end_date
            schedule.updated_at = datetime.utcnow()
            self.session.add(schedule)

            self.update_travel_routes(schedule, route_requests)

        logger.info(
            "User %s updated schedule %s (%d routes)", user_id, schedule_id, len(route_requests or [])
        )
        return schedule

    def update_travel_routes(
        self, schedule: TravelSchedule, route_requests: Optional[Sequence[RouteRequest]]
    ) -> List[TravelRoute]:
        """
        Full replace of the schedule's route list: delete every persisted row,
        then append one route per request in request order.

        Must run inside the caller's transaction.
        """
        self.schedules.delete_routes(self.session, schedule)

        for request in route_requests or []:
            place = self.get_place(request.place_id)
            route = TravelRoute(place_id=place.id, route_order=request.route_order)
            route.place = place
            schedule.routes.append(route)

        self.session.flush()
        return list(schedule.routes)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_schedule(self, schedule_id: int, user_id: str) -> None:
        """
        Delete a schedule with its attendees and routes, then its chat messages.

        Raises:
            ForbiddenScheduleError(FORBIDDEN_ACCESS_SCHEDULE): caller does not attend
            ForbiddenScheduleError(FORBIDDEN_DELETE_SCHEDULE): caller is a GUEST, even with ALL
        """
        with atomic(self.session):
            attendee = self.attendees.find_by_schedule_and_user(self.session, schedule_id, user_id)
            if not attendee:
                raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_ACCESS_SCHEDULE)

            check_author_role(attendee)

            self.schedules.delete(self.session, attendee.schedule)
            self.delete_chat_messages(schedule_id)

        logger.info("User %s deleted schedule %s", user_id, schedule_id)

    def delete_chat_messages(self, schedule_id: int) -> None:
        # Skip the bulk delete entirely when there is nothing to remove
        if self.chats.find_chat_messages(schedule_id):
            self.chats.delete_chat_messages(schedule_id)
