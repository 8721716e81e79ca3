"""Domain models for the accommodation booking service."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Annotated, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class UnitKind(StrEnum):
    """How a unit's inventory is occupied.

    An apartment is booked exclusively (one reservation per night); a hotel
    pools ``number_of_rooms`` interchangeable rooms.
    """

    APARTMENT = "apartment"
    HOTEL = "hotel"


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------


class UnitBase(BaseModel):
    id: int | None = None
    name: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(gt=0)
    location: str = Field(min_length=1)
    amenities: list[str] = Field(default_factory=list)


class Apartment(UnitBase):
    kind: Literal[UnitKind.APARTMENT] = UnitKind.APARTMENT
    number_of_bedrooms: int = Field(gt=0)
    number_of_bathrooms: int = Field(gt=0)
    square_meters: float = Field(gt=0)
    floor: int | None = None
    has_elevator: bool | None = None


class Hotel(UnitBase):
    kind: Literal[UnitKind.HOTEL] = UnitKind.HOTEL
    number_of_rooms: int = Field(gt=0)
    star_rating: int = Field(ge=1, le=5)

    @property
    def capacity(self) -> int:
        """Number of reservations the hotel can hold on a single night."""
        return self.number_of_rooms


Unit = Annotated[Union[Apartment, Hotel], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Reservations
# ---------------------------------------------------------------------------


class ReservationSummary(BaseModel):
    id: int
    start_date: date
    end_date: date
    guest_name: str


class Reservation(BaseModel):
    """A stay occupying one slot of a unit for every night in [start_date, end_date).

    ``end_date`` is the checkout day and is not occupied.
    """

    id: int | None = None
    unit_id: int
    guest_name: str = Field(min_length=1)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _end_after_start(self) -> Reservation:
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

    def summary(self) -> ReservationSummary:
        return ReservationSummary(
            id=self.id,
            start_date=self.start_date,
            end_date=self.end_date,
            guest_name=self.guest_name,
        )


class Decision(BaseModel):
    """Outcome of an availability check.

    ``reason`` is a sentence meant for the guest and is only set on denial.
    """

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> Decision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> Decision:
        return cls(allowed=False, reason=reason)


class SearchResult(BaseModel):
    unit_id: int
    unit_kind: UnitKind
    requested_date: date
    next_available_date: date
    is_available_on_requested_date: bool
    # Conflicts on requested_date only; absent when that day was free.
    conflicting_reservations: list[ReservationSummary] | None = None


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class ApartmentCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(gt=0)
    location: str = Field(min_length=1)
    amenities: list[str] = Field(default_factory=list)
    number_of_bedrooms: int = Field(gt=0)
    number_of_bathrooms: int = Field(gt=0)
    square_meters: float = Field(gt=0)
    floor: int | None = None
    has_elevator: bool | None = None


class HotelCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(gt=0)
    location: str = Field(min_length=1)
    amenities: list[str] = Field(default_factory=list)
    number_of_rooms: int = Field(gt=0)
    star_rating: int = Field(ge=1, le=5)


class ReservationCreate(BaseModel):
    unit_id: int = Field(gt=0)
    guest_name: str = Field(min_length=1)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _end_after_start(self) -> ReservationCreate:
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class BookingConflict(BaseModel):
    message: str = "Booking conflict"
    reason: str | None = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Page(BaseModel, Generic[T]):
    data: list[T]
    pagination: Pagination
