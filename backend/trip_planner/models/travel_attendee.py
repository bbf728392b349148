from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from trip_planner.models.member import Member
    from trip_planner.models.travel_schedule import TravelSchedule


class AttendeeRole(str, Enum):
    AUTHOR = "AUTHOR"
    GUEST = "GUEST"

    @property
    def is_author(self) -> bool:
        return self is AttendeeRole.AUTHOR


class ScheduleAction(str, Enum):
    """Things an attendee can do to a schedule, gated by permission."""

    EDIT = "EDIT"
    CHAT = "CHAT"
    READ = "READ"


class AttendeePermission(str, Enum):
    """
    Capability level of an attendee, ordered ALL ⊇ EDIT ⊇ CHAT ⊇ READ.

    Only the permission decides what an attendee may do to the schedule's
    content. Deleting and sharing are decided by AttendeeRole instead.
    """

    ALL = "ALL"
    EDIT = "EDIT"
    CHAT = "CHAT"
    READ = "READ"

    @property
    def rank(self) -> int:
        return _PERMISSION_RANK[self]

    def allows(self, action: ScheduleAction) -> bool:
        return self.rank >= _ACTION_REQUIRED_RANK[action]

    @classmethod
    def allowing(cls, action: ScheduleAction) -> list["AttendeePermission"]:
        """All permission levels that allow the action (used in queries)."""
        return [permission for permission in cls if permission.allows(action)]


_PERMISSION_RANK = {
    AttendeePermission.ALL: 4,
    AttendeePermission.EDIT: 3,
    AttendeePermission.CHAT: 2,
    AttendeePermission.READ: 1,
}

_ACTION_REQUIRED_RANK = {
    ScheduleAction.EDIT: _PERMISSION_RANK[AttendeePermission.EDIT],
    ScheduleAction.CHAT: _PERMISSION_RANK[AttendeePermission.CHAT],
    ScheduleAction.READ: _PERMISSION_RANK[AttendeePermission.READ],
}


class TravelAttendee(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("schedule_id", "member_id", name="uq_schedule_attendee"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    schedule_id: int = Field(foreign_key="travelschedule.id", index=True)
    member_id: int = Field(foreign_key="member.id", index=True)
    role: AttendeeRole = Field(sa_column=Column(String, nullable=False))
    permission: AttendeePermission = Field(sa_column=Column(String, nullable=False))
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    schedule: "TravelSchedule" = Relationship(back_populates="attendees")
    member: "Member" = Relationship(back_populates="attendees")

    @property
    def is_author(self) -> bool:
        return AttendeeRole(self.role).is_author

    def can(self, action: ScheduleAction) -> bool:
        return AttendeePermission(self.permission).allows(action)
