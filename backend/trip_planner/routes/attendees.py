from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from trip_planner.auth import get_current_user_id
from trip_planner.database import get_session
from trip_planner.models.travel_attendee import AttendeePermission, AttendeeRole
from trip_planner.services.attendee_service import AttendeeService
from trip_planner.services.errors import TripPlannerError

router = APIRouter()


class AttendeeCreate(BaseModel):
    user_id: str
    permission: AttendeePermission

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v):
        if not v or not v.strip():
            raise ValueError("user_id is required")
        return v.strip()


class AttendeeResponse(BaseModel):
    user_id: str
    nickname: str
    profile_url: Optional[str] = None
    role: AttendeeRole
    permission: AttendeePermission

    class Config:
        from_attributes = True


@router.get("/schedules/{schedule_id}/attendees", response_model=List[AttendeeResponse])
def get_attendees(
    schedule_id: int,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Attendees of a schedule, author first"""
    try:
        attendees = AttendeeService(session).get_attendees(schedule_id, user_id)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return [AttendeeResponse.model_validate(a) for a in attendees]


@router.post("/schedules/{schedule_id}/attendees", response_model=AttendeeResponse, status_code=201)
def create_attendee(
    schedule_id: int,
    attendee_data: AttendeeCreate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Share a schedule with another member (author only)"""
    try:
        attendee = AttendeeService(session).create_attendee(
            schedule_id, user_id, attendee_data.user_id, attendee_data.permission
        )
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return AttendeeResponse(
        user_id=attendee.member.user_id,
        nickname=attendee.member.nickname,
        profile_url=attendee.member.profile_image_url,
        role=AttendeeRole(attendee.role),
        permission=AttendeePermission(attendee.permission),
    )


@router.delete("/schedules/{schedule_id}/attendees", status_code=204)
def remove_attendee(
    schedule_id: int,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Leave a schedule. The author cannot leave."""
    try:
        AttendeeService(session).remove_attendee(schedule_id, user_id)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
