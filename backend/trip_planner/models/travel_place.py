from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class TravelPlace(SQLModel, table=True):
    """Catalog place record. Owned by the place catalog; read-only here."""

    id: Optional[int] = Field(default=None, primary_key=True)
    country: str = Field(index=True)
    city: str = Field(index=True)
    district: str = Field(index=True)
    address: str
    detail_address: Optional[str] = Field(default=None)
    place_name: str
    # Precomputed URL of the image flagged as primary, if any
    thumbnail_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
