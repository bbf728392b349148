"""Summary builder on in-memory schedules (no database needed)"""

from datetime import date, datetime, timedelta

import pytest

from trip_planner.models.member import Member
from trip_planner.models.travel_attendee import AttendeePermission, AttendeeRole, TravelAttendee
from trip_planner.models.travel_place import TravelPlace
from trip_planner.models.travel_route import TravelRoute
from trip_planner.models.travel_schedule import TravelSchedule
from trip_planner.services.errors import DataNotFoundError, ErrorCode, ForbiddenScheduleError
from trip_planner.services.summary_builder import build_summary, find_author, resolve_thumbnail_url

NOW = datetime(2025, 3, 10, 9, 0, 0)


def _attendee(user_id: str, role: AttendeeRole, permission=AttendeePermission.ALL) -> TravelAttendee:
    attendee = TravelAttendee(role=role, permission=permission)
    attendee.member = Member(
        user_id=user_id,
        nickname=user_id.capitalize(),
        email=f"{user_id}@example.com",
        profile_image_url=f"https://img.example.com/{user_id}.png",
    )
    return attendee


def _route(order: int, thumbnail_url=None) -> TravelRoute:
    route = TravelRoute(route_order=order)
    route.place = TravelPlace(
        country="대한민국",
        city="서울",
        district="중구",
        address=f"Address {order}",
        place_name=f"Place {order}",
        thumbnail_url=thumbnail_url,
    )
    return route


@pytest.fixture
def schedule():
    schedule = TravelSchedule(
        id=7,
        schedule_name="Seoul weekend",
        start_date=date(2025, 4, 5),
        end_date=date(2025, 4, 6),
        created_at=NOW - timedelta(hours=3),
    )
    schedule.attendees = [
        _attendee("alice", AttendeeRole.AUTHOR),
        _attendee("bob", AttendeeRole.GUEST, AttendeePermission.READ),
    ]
    return schedule


def test_build_summary_for_author(schedule):
    summary = build_summary(schedule, "alice", NOW)

    assert summary.schedule_id == 7
    assert summary.schedule_name == "Seoul weekend"
    assert summary.role == AttendeeRole.AUTHOR
    assert summary.author.nickname == "Alice"
    assert summary.author.profile_url == "https://img.example.com/alice.png"
    assert summary.since_update == "3 hours ago"


def test_build_summary_for_guest_reports_guest_role(schedule):
    summary = build_summary(schedule, "bob", NOW)

    assert summary.role == AttendeeRole.GUEST
    assert summary.author.nickname == "Alice"


def test_build_summary_prefers_updated_at(schedule):
    schedule.updated_at = NOW - timedelta(minutes=2)

    assert build_summary(schedule, "alice", NOW).since_update == "2 minutes ago"


def test_build_summary_without_routes_has_no_thumbnail(schedule):
    assert build_summary(schedule, "alice", NOW).thumbnail_url is None


def test_thumbnail_comes_from_first_route(schedule):
    schedule.routes = [_route(2, "https://img/second.jpg"), _route(1, "https://img/first.jpg")]

    assert build_summary(schedule, "alice", NOW).thumbnail_url == "https://img/first.jpg"


def test_thumbnail_none_when_first_place_has_no_image():
    assert resolve_thumbnail_url([_route(1), _route(2, "https://img/second.jpg")]) is None


def test_thumbnail_none_without_route_order_one():
    assert resolve_thumbnail_url([_route(2, "https://img/second.jpg")]) is None
    assert resolve_thumbnail_url(None) is None


def test_missing_author_raises_author_not_found(schedule):
    schedule.attendees = [_attendee("bob", AttendeeRole.GUEST)]

    with pytest.raises(DataNotFoundError) as exc_info:
        build_summary(schedule, "bob", NOW)
    assert exc_info.value.code == ErrorCode.AUTHOR_NOT_FOUND
    assert exc_info.value.status_code == 404


def test_find_author_scans_attendees():
    attendees = [_attendee("bob", AttendeeRole.GUEST), _attendee("carol", AttendeeRole.AUTHOR)]

    assert find_author(attendees).nickname == "Carol"


def test_non_attendee_is_forbidden_before_author_check():
    """A caller who does not attend gets FORBIDDEN even when the author is missing"""
    schedule = TravelSchedule(
        id=1, schedule_name="Solo", start_date=date(2025, 1, 1), end_date=date(2025, 1, 2), created_at=NOW
    )
    schedule.attendees = [_attendee("bob", AttendeeRole.GUEST)]

    with pytest.raises(ForbiddenScheduleError) as exc_info:
        build_summary(schedule, "mallory", NOW)
    assert exc_info.value.code == ErrorCode.FORBIDDEN_ACCESS_SCHEDULE
