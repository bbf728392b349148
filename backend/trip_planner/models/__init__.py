from trip_planner.models.chat_message import ChatMessage
from trip_planner.models.member import Member
from trip_planner.models.travel_attendee import AttendeePermission, AttendeeRole, ScheduleAction, TravelAttendee
from trip_planner.models.travel_place import TravelPlace
from trip_planner.models.travel_route import TravelRoute
from trip_planner.models.travel_schedule import TravelSchedule

__all__ = [
    "Member",
    "TravelSchedule",
    "TravelAttendee",
    "AttendeeRole",
    "AttendeePermission",
    "ScheduleAction",
    "TravelRoute",
    "TravelPlace",
    "ChatMessage",
]
