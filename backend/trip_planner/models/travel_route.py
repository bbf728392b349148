from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from trip_planner.models.travel_place import TravelPlace
    from trip_planner.models.travel_schedule import TravelSchedule


class TravelRoute(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("schedule_id", "route_order", name="uq_schedule_route_order"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    schedule_id: int = Field(foreign_key="travelschedule.id", index=True)
    place_id: int = Field(foreign_key="travelplace.id")
    route_order: int  # 1-based

    # Relationships
    schedule: "TravelSchedule" = Relationship(back_populates="routes")
    place: "TravelPlace" = Relationship()
