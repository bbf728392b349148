"""
Summary Builder

Derives the read-only list-view projection of a schedule from the schedule,
its attendees and its routes:

- author: the attendee with role AUTHOR (scanned, never stored)
- thumbnail: thumbnail of the place on route order 1, if any
- role: the requesting member's role on the schedule
- since_update: elapsed-time label from the last modification
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from trip_planner.models.travel_attendee import AttendeeRole, TravelAttendee
from trip_planner.models.travel_route import TravelRoute
from trip_planner.models.travel_schedule import TravelSchedule
from trip_planner.services.errors import DataNotFoundError, ErrorCode, ForbiddenScheduleError
from trip_planner.utils.time_labels import since_label

FIRST_ROUTE_ORDER = 1


@dataclass
class AuthorSummary:
    nickname: str
    profile_url: Optional[str]


@dataclass
class ScheduleSummary:
    schedule_id: int
    schedule_name: str
    start_date: date
    end_date: date
    since_update: str
    thumbnail_url: Optional[str]
    author: AuthorSummary
    role: AttendeeRole


def find_author(attendees: List[TravelAttendee]) -> AuthorSummary:
    """
    Resolve the author from an attendee list.

    Attendee lists are loaded independently of the schedule, so a missing
    author is checked rather than assumed.

    Raises:
        DataNotFoundError(AUTHOR_NOT_FOUND): no attendee has role AUTHOR
    """
    author = next((a for a in attendees if AttendeeRole(a.role).is_author), None)
    if author is None:
        raise DataNotFoundError(ErrorCode.AUTHOR_NOT_FOUND)

    return AuthorSummary(nickname=author.member.nickname, profile_url=author.member.profile_image_url)


def resolve_thumbnail_url(routes: Optional[List[TravelRoute]]) -> Optional[str]:
    """Thumbnail of the first route's place; None when there is no such route or image."""
    if not routes:
        return None

    first = next((r for r in routes if r.route_order == FIRST_ROUTE_ORDER), None)
    if first is None or first.place is None:
        return None
    return first.place.thumbnail_url


def resolve_attendee(attendees: List[TravelAttendee], user_id: str) -> TravelAttendee:
    """
    Raises:
        ForbiddenScheduleError(FORBIDDEN_ACCESS_SCHEDULE): user is not among the attendees
    """
    attendee = next((a for a in attendees if a.member.user_id == user_id), None)
    if attendee is None:
        raise ForbiddenScheduleError(ErrorCode.FORBIDDEN_ACCESS_SCHEDULE)
    return attendee


def build_summary(schedule: TravelSchedule, user_id: str, now: Optional[datetime] = None) -> ScheduleSummary:
    attendees = schedule.attendees or []
    attendee = resolve_attendee(attendees, user_id)

    return ScheduleSummary(
        schedule_id=schedule.id,
        schedule_name=schedule.schedule_name,
        start_date=schedule.start_date,
        end_date=schedule.end_date,
        since_update=since_label(schedule.last_modified_at, now),
        thumbnail_url=resolve_thumbnail_url(schedule.routes),
        author=find_author(attendees),
        role=AttendeeRole(attendee.role),
    )
