"""Tests for ConflictResolutionService — policy selection and the edit exclusion."""

from __future__ import annotations

from datetime import date

import pytest

from lodging.domain.errors import UnitNotFoundError, UnsupportedUnitKindError
from lodging.domain.models import Apartment, Hotel, Reservation, UnitKind
from lodging.repos.memory import ReservationRepository, UnitRepository
from lodging.services.validation import ConflictResolutionService


@pytest.fixture()
def env():
    """Fresh repos with one apartment (id 1) and one two-room hotel (id 2)."""
    unit_repo = UnitRepository()
    reservation_repo = ReservationRepository()
    unit_repo.add(
        Apartment(
            name="Loft",
            price=100,
            location="Lisbon",
            number_of_bedrooms=1,
            number_of_bathrooms=1,
            square_meters=40,
        )
    )
    unit_repo.add(
        Hotel(name="Plaza", price=150, location="Porto", number_of_rooms=2, star_rating=3)
    )

    class Env:
        pass

    e = Env()
    e.unit_repo = unit_repo
    e.reservation_repo = reservation_repo
    e.service = ConflictResolutionService(unit_repo, reservation_repo)
    return e


def _book(repo: ReservationRepository, unit_id: int, start: date, end: date) -> Reservation:
    return repo.add(
        Reservation(unit_id=unit_id, guest_name="Guest", start_date=start, end_date=end)
    )


def test_apartment_overlap_denied(env):
    _book(env.reservation_repo, 1, date(2024, 1, 1), date(2024, 1, 10))
    decision = env.service.validate_reservation(
        1, UnitKind.APARTMENT, date(2024, 1, 5), date(2024, 1, 12)
    )
    assert decision.allowed is False
    assert decision.reason == "Apartment is already booked for these dates"


def test_exclusion_filter_allows_edit_of_own_reservation(env):
    own = _book(env.reservation_repo, 1, date(2024, 1, 1), date(2024, 1, 10))
    decision = env.service.validate_reservation(
        1,
        UnitKind.APARTMENT,
        date(2024, 1, 3),
        date(2024, 1, 12),
        exclude_reservation_id=own.id,
    )
    assert decision.allowed is True


def test_exclusion_only_removes_named_reservation(env):
    own = _book(env.reservation_repo, 1, date(2024, 1, 1), date(2024, 1, 5))
    _book(env.reservation_repo, 1, date(2024, 1, 8), date(2024, 1, 12))
    decision = env.service.validate_reservation(
        1,
        UnitKind.APARTMENT,
        date(2024, 1, 3),
        date(2024, 1, 9),
        exclude_reservation_id=own.id,
    )
    assert decision.allowed is False


def test_other_units_reservations_ignored(env):
    _book(env.reservation_repo, 2, date(2024, 1, 1), date(2024, 1, 10))
    decision = env.service.validate_reservation(
        1, "apartment", date(2024, 1, 1), date(2024, 1, 10)
    )
    assert decision.allowed is True


def test_hotel_uses_room_count(env):
    _book(env.reservation_repo, 2, date(2024, 1, 1), date(2024, 1, 10))
    allowed = env.service.validate_reservation(
        2, UnitKind.HOTEL, date(2024, 1, 2), date(2024, 1, 4)
    )
    assert allowed.allowed is True

    _book(env.reservation_repo, 2, date(2024, 1, 2), date(2024, 1, 4))
    denied = env.service.validate_reservation(
        2, UnitKind.HOTEL, date(2024, 1, 3), date(2024, 1, 5)
    )
    assert denied.allowed is False
    assert denied.reason == "All 2 rooms are booked for these dates"


def test_hotel_policy_for_missing_unit_is_fatal(env):
    with pytest.raises(UnitNotFoundError):
        env.service.validate_reservation(
            99, UnitKind.HOTEL, date(2024, 1, 1), date(2024, 1, 2)
        )


def test_unsupported_kind_is_fatal(env):
    with pytest.raises(UnsupportedUnitKindError, match="Unsupported accommodation type: villa"):
        env.service.validate_reservation(1, "villa", date(2024, 1, 1), date(2024, 1, 2))


def test_resolve_unit_kind(env):
    assert env.service.resolve_unit_kind(1) == UnitKind.APARTMENT
    assert env.service.resolve_unit_kind(2) == UnitKind.HOTEL


def test_resolve_unit_kind_missing(env):
    with pytest.raises(UnitNotFoundError, match="Accommodation not found"):
        env.service.resolve_unit_kind(42)
