"""
Place catalog adapter.

The catalog owns place data; schedules only reference places by id and read
their name, address and precomputed thumbnail.
"""

from typing import Optional

from sqlalchemy import or_
from sqlmodel import Session, col, select

from trip_planner.models.travel_place import TravelPlace
from trip_planner.utils.pagination import Page, PageWindow
from trip_planner.utils.sql import LIKE_ESCAPE, contains_pattern, count_rows


class PlaceCatalog:
    def __init__(self, session: Session):
        self.session = session

    def find_place_by_id(self, place_id: int) -> Optional[TravelPlace]:
        return self.session.get(TravelPlace, place_id)

    def search_places(self, keyword: str, window: PageWindow) -> Page[TravelPlace]:
        """Places whose name, address or district contains the keyword"""
        pattern = contains_pattern(keyword)
        statement = (
            select(TravelPlace)
            .where(
                or_(
                    col(TravelPlace.place_name).ilike(pattern, escape=LIKE_ESCAPE),
                    col(TravelPlace.address).ilike(pattern, escape=LIKE_ESCAPE),
                    col(TravelPlace.district).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(col(TravelPlace.id))
        )
        return self._page(statement, window)

    def find_places_by_area(self, country: str, city: str, district: str, window: PageWindow) -> Page[TravelPlace]:
        statement = (
            select(TravelPlace)
            .where(TravelPlace.country == country, TravelPlace.city == city, TravelPlace.district == district)
            .order_by(col(TravelPlace.id))
        )
        return self._page(statement, window)

    def _page(self, statement, window: PageWindow) -> Page[TravelPlace]:
        items = self.session.exec(statement.offset(window.offset).limit(window.size)).all()
        return Page(items=list(items), window=window, total_elements=count_rows(self.session, statement))
