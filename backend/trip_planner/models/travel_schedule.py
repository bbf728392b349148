from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

from trip_planner.models.travel_attendee import AttendeeRole

if TYPE_CHECKING:
    from trip_planner.models.travel_attendee import TravelAttendee
    from trip_planner.models.travel_route import TravelRoute


class TravelSchedule(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    schedule_name: str
    start_date: date
    end_date: date
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = Field(default=None)

    # Relationships (the schedule owns both collections)
    attendees: List["TravelAttendee"] = Relationship(
        back_populates="schedule",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "TravelAttendee.id"},
    )
    routes: List["TravelRoute"] = Relationship(
        back_populates="schedule",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "TravelRoute.route_order"},
    )

    @property
    def author(self) -> Optional["TravelAttendee"]:
        """The AUTHOR attendee, found by scanning attendees. None if the list has none."""
        return next((a for a in self.attendees if AttendeeRole(a.role).is_author), None)

    @property
    def last_modified_at(self) -> datetime:
        return self.updated_at or self.created_at
