from datetime import date
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

def check_limit(limit) -> int:
    """Row limits must be positive ints; ``True`` and floats are refused."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    return limit

class PropertySearchOptions(BaseModel):
    """Optional constraints for a property listing. Prices are in whole currency units."""
    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    owner_id: Optional[int] = None
    minimum_price_per_night: Optional[Decimal] = Field(default=None, ge=0)
    maximum_price_per_night: Optional[Decimal] = Field(default=None, ge=0)
    minimum_rating: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("city")
    @classmethod
    def _blank_city_is_absent(cls, value):
        if value is not None and not value.strip():
            return None
        return value

class NewUser(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)

class PropertyColumns(BaseModel):
    owner_id: int
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: str
    cover_photo_url: str
    # minor units (cents)
    cost_per_night: int = 0
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    country: str
    street: str
    city: str
    province: str
    post_code: str

class NewProperty(PropertyColumns):
    title: str = Field(min_length=1)
    cost_per_night: int = Field(default=0, ge=0)
    parking_spaces: int = Field(default=0, ge=0)
    number_of_bathrooms: int = Field(default=0, ge=0)
    number_of_bedrooms: int = Field(default=0, ge=0)

class UserRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    name: str
    email: str
    password: str

class PropertyRecord(PropertyColumns):
    """A stored row as-is; no new-listing rules are re-checked on read."""
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    average_rating: Optional[float] = None

class ReservationRecord(PropertyRecord):
    """A past stay: the property columns, then the reservation's own columns.
    ``id`` is the reservation id; the property is ``property_id``.
    """
    property_id: int
    guest_id: int
    start_date: date
    end_date: date
