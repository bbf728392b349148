from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, field_validator, model_validator
from sqlmodel import Session

from trip_planner.auth import get_current_user_id
from trip_planner.database import get_session
from trip_planner.models.travel_attendee import AttendeeRole
from trip_planner.models.travel_place import TravelPlace
from trip_planner.models.travel_route import TravelRoute
from trip_planner.repositories.schedule_repository import ScheduleListMode
from trip_planner.services.attendee_service import AttendeeService
from trip_planner.services.errors import TripPlannerError
from trip_planner.services.schedule_service import RouteRequest, ScheduleService
from trip_planner.utils.pagination import Page

router = APIRouter()


def _validate_schedule_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("schedule_name is required")
    return v.strip()


class ScheduleCreate(BaseModel):
    schedule_name: str
    start_date: date
    end_date: date

    @field_validator("schedule_name")
    @classmethod
    def validate_schedule_name(cls, v):
        return _validate_schedule_name(v)

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self


class RouteItem(BaseModel):
    route_order: int
    place_id: int

    @field_validator("route_order")
    @classmethod
    def validate_route_order(cls, v):
        if v < 1:
            raise ValueError("route_order must be >= 1")
        return v


class ScheduleUpdate(BaseModel):
    schedule_name: str
    start_date: date
    end_date: date
    routes: List[RouteItem] = []

    @field_validator("schedule_name")
    @classmethod
    def validate_schedule_name(cls, v):
        return _validate_schedule_name(v)

    @model_validator(mode="after")
    def validate_update(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        orders = [route.route_order for route in self.routes]
        if len(orders) != len(set(orders)):
            raise ValueError("route_order values must be unique")
        return self


class ScheduleCreateResponse(BaseModel):
    schedule_id: int


class AuthorResponse(BaseModel):
    nickname: str
    profile_url: Optional[str] = None

    class Config:
        from_attributes = True


class ScheduleSummaryResponse(BaseModel):
    schedule_id: int
    schedule_name: str
    start_date: date
    end_date: date
    since_update: str
    thumbnail_url: Optional[str] = None
    author: AuthorResponse
    role: AttendeeRole

    class Config:
        from_attributes = True


class ScheduleListResponse(BaseModel):
    schedules: List[ScheduleSummaryResponse]
    page: int
    size: int
    total_pages: int
    total_elements: int
    total_shared_elements: int


class PlaceResponse(BaseModel):
    id: int
    place_name: str
    country: str
    city: str
    district: str
    address: str
    detail_address: Optional[str] = None
    thumbnail_url: Optional[str] = None

    class Config:
        from_attributes = True


class PlacePageResponse(BaseModel):
    places: List[PlaceResponse]
    page: int
    size: int
    total_pages: int
    total_elements: int


class RouteResponse(BaseModel):
    route_order: int
    place_id: int
    place_name: str
    address: str
    thumbnail_url: Optional[str] = None


class RoutePageResponse(BaseModel):
    routes: List[RouteResponse]
    page: int
    size: int
    total_pages: int
    total_elements: int


class ScheduleAttendeeResponse(BaseModel):
    user_id: str
    role: AttendeeRole


class ScheduleDetailResponse(BaseModel):
    schedule_id: int
    schedule_name: str
    start_date: date
    end_date: date
    routes: List[RouteResponse]
    attendees: List[ScheduleAttendeeResponse]
    places: PlacePageResponse


def _route_response(route: TravelRoute) -> RouteResponse:
    return RouteResponse(
        route_order=route.route_order,
        place_id=route.place_id,
        place_name=route.place.place_name,
        address=route.place.address,
        thumbnail_url=route.place.thumbnail_url,
    )


def _place_page_response(page: Page[TravelPlace]) -> PlacePageResponse:
    return PlacePageResponse(
        places=[PlaceResponse.model_validate(place) for place in page.items],
        page=page.window.page,
        size=page.window.size,
        total_pages=page.total_pages,
        total_elements=page.total_elements,
    )


def _require_schedule_attendee(session: Session, schedule_id: int, user_id: str) -> None:
    """Read endpoints: the schedule must exist and the caller must attend it."""
    ScheduleService(session).get_schedule(schedule_id)
    AttendeeService(session).require_attendee(schedule_id, user_id)


@router.post("/schedules", response_model=ScheduleCreateResponse, status_code=201)
def create_schedule(
    schedule_data: ScheduleCreate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Create a schedule; the caller becomes its author"""
    try:
        schedule_id = ScheduleService(session).create_schedule(
            schedule_data.schedule_name, schedule_data.start_date, schedule_data.end_date, user_id
        )
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return ScheduleCreateResponse(schedule_id=schedule_id)


@router.get("/schedules", response_model=ScheduleListResponse)
def list_schedules(
    page: int = Query(1, ge=1),
    mode: ScheduleListMode = Query(ScheduleListMode.ALL),
    keyword: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """
    List the caller's schedules, most recently changed first.

    mode=ALL every schedule the caller attends, SHARED only those with other
    attendees, EDITABLE only those the caller may edit (smaller page size,
    used by the add-to-schedule picker).
    """
    try:
        result = ScheduleService(session).list_schedules(page, user_id, mode, keyword)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return ScheduleListResponse(
        schedules=[ScheduleSummaryResponse.model_validate(summary) for summary in result.page.items],
        page=result.page.window.page,
        size=result.page.window.size,
        total_pages=result.page.total_pages,
        total_elements=result.total_elements,
        total_shared_elements=result.total_shared_elements,
    )


@router.get("/schedules/{schedule_id}", response_model=ScheduleDetailResponse)
def get_schedule_detail(
    schedule_id: int,
    page: int = Query(1, ge=1),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Schedule with its routes, attendees and a page of places to add"""
    try:
        _require_schedule_attendee(session, schedule_id, user_id)
        detail = ScheduleService(session).get_schedule_detail(schedule_id, page)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return ScheduleDetailResponse(
        schedule_id=detail.schedule.id,
        schedule_name=detail.schedule.schedule_name,
        start_date=detail.schedule.start_date,
        end_date=detail.schedule.end_date,
        routes=[_route_response(route) for route in detail.routes],
        attendees=[
            ScheduleAttendeeResponse(user_id=a.member.user_id, role=AttendeeRole(a.role)) for a in detail.attendees
        ],
        places=_place_page_response(detail.places),
    )


@router.put("/schedules/{schedule_id}", response_model=ScheduleCreateResponse)
def update_schedule(
    schedule_id: int,
    schedule_data: ScheduleUpdate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Update name/dates and replace the whole route list"""
    route_requests = [RouteRequest(route_order=r.route_order, place_id=r.place_id) for r in schedule_data.routes]
    try:
        schedule = ScheduleService(session).update_schedule(
            user_id,
            schedule_id,
            schedule_data.schedule_name,
            schedule_data.start_date,
            schedule_data.end_date,
            route_requests,
        )
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return ScheduleCreateResponse(schedule_id=schedule.id)


@router.delete("/schedules/{schedule_id}", status_code=204)
def delete_schedule(
    schedule_id: int,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Delete a schedule (author only) with its routes, attendees and chat"""
    try:
        ScheduleService(session).delete_schedule(schedule_id, user_id)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/schedules/{schedule_id}/travels", response_model=PlacePageResponse)
def get_travel_places(
    schedule_id: int,
    page: int = Query(1, ge=1),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    try:
        _require_schedule_attendee(session, schedule_id, user_id)
        places = ScheduleService(session).get_travel_places(schedule_id, page)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return _place_page_response(places)


@router.get("/schedules/{schedule_id}/travels/search", response_model=PlacePageResponse)
def search_travel_places(
    schedule_id: int,
    keyword: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Search the place catalog by name, address or district"""
    try:
        _require_schedule_attendee(session, schedule_id, user_id)
        places = ScheduleService(session).search_travel_places(schedule_id, page, keyword)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return _place_page_response(places)


@router.get("/schedules/{schedule_id}/routes", response_model=RoutePageResponse)
def get_travel_routes(
    schedule_id: int,
    page: int = Query(1, ge=1),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    try:
        _require_schedule_attendee(session, schedule_id, user_id)
        routes = ScheduleService(session).get_travel_routes(schedule_id, page)
    except TripPlannerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return RoutePageResponse(
        routes=[_route_response(route) for route in routes.items],
        page=routes.window.page,
        size=routes.window.size,
        total_pages=routes.total_pages,
        total_elements=routes.total_elements,
    )
