from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from core.models.base import CamelModel, coerce_text, strip_text
from core.models.entity import EntityKind, MediaSlot


class TripCategory(str, Enum):
    BACKPACKING_TRIPS = "BACKPACKING TRIPS"
    SUNRISE_TREKS = "SUNRISE TREKS"
    ONE_DAY_TRIPS = "ONE DAY TRIPS"
    INTERNATIONAL_TRIPS = "INTERNATIONAL TRIPS"
    WOMEN_TRIPS = "WOMEN TRIPS"
    LONG_WEEKEND = "LONG WEEKEND"
    WATER_SPORTS = "WATER SPORTS"
    TWO_DAYS_TREK = "TWO DAYS TREK"


TRIP_CATEGORIES: list[str] = [category.value for category in TripCategory]


class ItineraryDay(CamelModel):
    day: str = Field(..., min_length=1)
    activities: list[str] = Field(..., min_length=1)

    @field_validator("day", mode="before")
    @classmethod
    def coerce_day(cls, value: Any) -> Any:
        return coerce_text(value)


class TripCreate(CamelModel):
    heading: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    from_: str = Field(..., min_length=1, alias="from")
    to: str = Field(..., min_length=1)
    category: list[TripCategory] = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    itinerary: list[ItineraryDay] = Field(..., min_length=1)
    highlights: list[str] = Field(..., min_length=1)
    pickup_location: list[str] = Field(..., min_length=1)
    things_to_carry: list[str] = Field(..., min_length=1)

    @field_validator("heading", "description", "from_", "to", mode="before")
    @classmethod
    def strip_text_fields(cls, value: Any) -> Any:
        return strip_text(value)


class TripUpdate(CamelModel):
    heading: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    from_: str | None = Field(default=None, min_length=1, alias="from")
    to: str | None = Field(default=None, min_length=1)
    category: list[TripCategory] | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, gt=0)
    itinerary: list[ItineraryDay] | None = Field(default=None, min_length=1)
    highlights: list[str] | None = Field(default=None, min_length=1)
    pickup_location: list[str] | None = Field(default=None, min_length=1)
    things_to_carry: list[str] | None = Field(default=None, min_length=1)

    @field_validator("heading", "description", "from_", "to", mode="before")
    @classmethod
    def strip_text_fields(cls, value: Any) -> Any:
        return strip_text(value)


class Trip(TripCreate):
    id: str
    header_image: str | None = None
    hero_image: str | None = None
    bookings: list[str] = []
    created_at: str
    updated_at: str
    version: int = 1


TRIP = EntityKind(
    name="trip",
    label="Trip",
    document=Trip,
    slots=(
        MediaSlot(name="headerImage", attr="header_image", folder="trips/headers", prefix="trip_header"),
        MediaSlot(name="heroImage", attr="hero_image", folder="trips/heroes", prefix="trip_hero"),
    ),
    dependents=lambda trip: list(trip.bookings),
    dependents_message="Cannot delete trip with existing bookings",
)
