# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from trip_planner.models.chat_message import ChatMessage  # noqa: F401
from trip_planner.models.member import Member  # noqa: F401
from trip_planner.models.travel_attendee import TravelAttendee  # noqa: F401
from trip_planner.models.travel_place import TravelPlace  # noqa: F401
from trip_planner.models.travel_route import TravelRoute  # noqa: F401
from trip_planner.models.travel_schedule import TravelSchedule  # noqa: F401
