"""FastAPI application: entry point for the accommodation booking service."""

from __future__ import annotations

import logging
import threading
from datetime import date

from fastapi import Body, FastAPI, HTTPException, Query, Response

from lodging.config import configure_logging, get_settings
from lodging.domain.errors import (
    SearchHorizonExhaustedError,
    UnitNotFoundError,
)
from lodging.domain.models import (
    Apartment,
    ApartmentCreate,
    BookingConflict,
    Hotel,
    HotelCreate,
    Page,
    Reservation,
    ReservationCreate,
    SearchResult,
    Unit,
    UnitKind,
)
from lodging.pagination import DEFAULT_LIMIT, MAX_LIMIT, paginate
from lodging.repos.memory import (
    ReservationRepository,
    UnitRepository,
    create_reservation_repository,
    create_unit_repository,
)
from lodging.services.availability import NextAvailableDateService
from lodging.services.conflicts import to_calendar_day
from lodging.services.validation import ConflictResolutionService

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.api_title)

# ── Singletons ────────────────────────────────────────────────────────
if settings.seed_data:
    unit_repo = create_unit_repository()
    reservation_repo = create_reservation_repository()
else:
    unit_repo = UnitRepository()
    reservation_repo = ReservationRepository()

conflict_service = ConflictResolutionService(unit_repo, reservation_repo)
next_available_service = NextAvailableDateService(unit_repo, reservation_repo)

# Serializes check-then-write for bookings; the repositories have no
# transactions of their own.
_booking_lock = threading.Lock()


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    """Liveness check."""
    return {"status": "ok"}


# Apartments ----------------------------------------------------------


@app.get("/apartments", response_model=list[Apartment])
def list_apartments() -> list[Apartment]:
    """Return all apartments."""
    return unit_repo.list_by_kind(UnitKind.APARTMENT)


@app.get("/apartments/{apartment_id}", response_model=Apartment)
def get_apartment(apartment_id: int) -> Apartment:
    """Return a single apartment by id."""
    unit = unit_repo.get(apartment_id)
    if not isinstance(unit, Apartment):
        raise HTTPException(status_code=404, detail="Apartment not found")
    return unit


@app.post("/apartments", response_model=Apartment, status_code=201)
def create_apartment(payload: ApartmentCreate) -> Apartment:
    """Create an apartment."""
    return unit_repo.add(Apartment(**payload.model_dump()))


# Hotels --------------------------------------------------------------


@app.get("/hotels", response_model=list[Hotel])
def list_hotels() -> list[Hotel]:
    """Return all hotels."""
    return unit_repo.list_by_kind(UnitKind.HOTEL)


@app.get("/hotels/{hotel_id}", response_model=Hotel)
def get_hotel(hotel_id: int) -> Hotel:
    """Return a single hotel by id."""
    unit = unit_repo.get(hotel_id)
    if not isinstance(unit, Hotel):
        raise HTTPException(status_code=404, detail="Hotel not found")
    return unit


@app.post("/hotels", response_model=Hotel, status_code=201)
def create_hotel(payload: HotelCreate) -> Hotel:
    """Create a hotel."""
    return unit_repo.add(Hotel(**payload.model_dump()))


# Accommodations (either kind) ----------------------------------------


@app.get("/accommodations", response_model=Page[Unit])
def list_accommodations(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> Page:
    """Return one page of apartments and hotels, ordered by id."""
    return paginate(unit_repo.list_all(), page, limit)


@app.get("/accommodations/{unit_id}", response_model=Unit)
def get_accommodation(unit_id: int) -> Unit:
    """Return a single apartment or hotel by id."""
    unit = unit_repo.get(unit_id)
    if unit is None:
        raise HTTPException(status_code=404, detail="Accommodation not found")
    return unit


@app.put("/accommodations/{unit_id}", response_model=Unit)
def update_accommodation(
    unit_id: int,
    payload: Apartment | Hotel = Body(discriminator="kind"),
) -> Unit:
    """Replace a unit's details, keeping its id.

    Later bookings and searches see the new details, including a hotel's
    room count.
    """
    with _booking_lock:
        if unit_repo.get(unit_id) is None:
            logger.warning("Update of unknown accommodation %s", unit_id)
            raise HTTPException(status_code=404, detail="Accommodation not found")
        unit = payload.model_copy(update={"id": unit_id})
        unit_repo.update(unit)
    logger.info("Updated accommodation %s (%s)", unit_id, unit.kind)
    return unit


@app.delete("/accommodations/{unit_id}", status_code=204)
def delete_accommodation(unit_id: int) -> Response:
    """Delete a unit together with its bookings."""
    with _booking_lock:
        if unit_repo.get(unit_id) is None:
            raise HTTPException(status_code=404, detail="Accommodation not found")
        reservation_repo.delete_for_unit(unit_id)
        unit_repo.delete(unit_id)
    return Response(status_code=204)


@app.get(
    "/accommodations/{unit_id}/next-available-date",
    response_model=SearchResult,
    response_model_exclude_none=True,
)
def next_available_date(
    unit_id: int,
    from_: str = Query(..., alias="from", pattern=r"^\d{4}-\d{2}-\d{2}$"),
) -> SearchResult:
    """Find the first day on or after ``from`` with room for another stay."""
    try:
        from_date = to_calendar_day(from_)
    except ValueError:
        logger.warning("Rejected next-available-date request: bad date %r", from_)
        raise HTTPException(status_code=400, detail="Invalid date format") from None
    if from_date < date.today():
        logger.warning("Rejected next-available-date request: %s is past", from_date)
        raise HTTPException(status_code=400, detail="Date cannot be in the past")

    try:
        return next_available_service.find_next_available_date(unit_id, from_date)
    except UnitNotFoundError as exc:
        logger.warning("Next-available-date for unknown accommodation %s", unit_id)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SearchHorizonExhaustedError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# Bookings ------------------------------------------------------------


def _check_booking(payload: ReservationCreate, exclude_id: int | None = None) -> None:
    """Raise 400 for an unknown unit and 409 when the dates do not fit."""
    try:
        kind = conflict_service.resolve_unit_kind(payload.unit_id)
        decision = conflict_service.validate_reservation(
            payload.unit_id,
            kind,
            payload.start_date,
            payload.end_date,
            exclude_reservation_id=exclude_id,
        )
    except UnitNotFoundError:
        logger.warning("Booking refers to unknown accommodation %s", payload.unit_id)
        raise HTTPException(status_code=400, detail="Invalid accommodation ID") from None

    if not decision.allowed:
        logger.warning(
            "Booking conflict on accommodation %s: %s", payload.unit_id, decision.reason
        )
        raise HTTPException(
            status_code=409,
            detail=BookingConflict(reason=decision.reason).model_dump(),
        )


@app.get("/bookings", response_model=Page[Reservation])
def list_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> Page:
    """Return one page of bookings, ordered by id."""
    return paginate(reservation_repo.list_all(), page, limit)


@app.get("/bookings/{booking_id}", response_model=Reservation)
def get_booking(booking_id: int) -> Reservation:
    """Return a single booking by id."""
    reservation = reservation_repo.get(booking_id)
    if reservation is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return reservation


@app.post("/bookings", response_model=Reservation, status_code=201)
def create_booking(payload: ReservationCreate) -> Reservation:
    """Create a booking if the unit has room for the requested dates."""
    with _booking_lock:
        _check_booking(payload)
        reservation = reservation_repo.add(Reservation(**payload.model_dump()))
    logger.info(
        "Booked unit %s for %s (%s..%s)",
        reservation.unit_id,
        reservation.guest_name,
        reservation.start_date,
        reservation.end_date,
    )
    return reservation


@app.put("/bookings/{booking_id}", response_model=Reservation)
def update_booking(booking_id: int, payload: ReservationCreate) -> Reservation:
    """Move or edit a booking, checked against every other booking."""
    with _booking_lock:
        if reservation_repo.get(booking_id) is None:
            logger.warning("Update of unknown booking %s", booking_id)
            raise HTTPException(status_code=404, detail="Booking not found")
        _check_booking(payload, exclude_id=booking_id)
        reservation = Reservation(id=booking_id, **payload.model_dump())
        reservation_repo.update(reservation)
    return reservation


@app.delete("/bookings/{booking_id}", status_code=204)
def delete_booking(booking_id: int) -> Response:
    """Cancel a booking."""
    with _booking_lock:
        if reservation_repo.get(booking_id) is None:
            raise HTTPException(status_code=404, detail="Booking not found")
        reservation_repo.delete(booking_id)
    return Response(status_code=204)
