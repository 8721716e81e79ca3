"""In-memory repositories for units and reservations."""

from __future__ import annotations

from datetime import date, timedelta

from lodging.domain.models import Apartment, Hotel, Reservation, Unit, UnitKind
from lodging.services.conflicts import ONE_DAY, find_conflicts


class UnitRepository:
    """Dict-backed store for apartments and hotels, keyed by integer id."""

    def __init__(self) -> None:
        self._store: dict[int, Unit] = {}
        self._next_id = 1

    def add(self, unit: Unit) -> Unit:
        if unit.id is None:
            unit.id = self._next_id
        self._next_id = max(self._next_id, unit.id + 1)
        self._store[unit.id] = unit
        return unit

    def update(self, unit: Unit) -> None:
        self._store[unit.id] = unit

    def clear(self) -> None:
        self._store.clear()
        self._next_id = 1

    def get(self, unit_id: int) -> Unit | None:
        return self._store.get(unit_id)

    def list_all(self) -> list[Unit]:
        return [self._store[uid] for uid in sorted(self._store)]

    def list_by_kind(self, kind: UnitKind) -> list[Unit]:
        return [u for u in self.list_all() if u.kind == kind]

    def delete(self, unit_id: int) -> None:
        self._store.pop(unit_id, None)

    def get_unit_kind(self, unit_id: int) -> UnitKind | None:
        unit = self._store.get(unit_id)
        return unit.kind if unit is not None else None

    def get_unit_capacity(self, unit_id: int) -> int | None:
        """Room count of a hotel; ``None`` for missing or non-hotel units."""
        unit = self._store.get(unit_id)
        if isinstance(unit, Hotel):
            return unit.capacity
        return None


class ReservationRepository:
    """Dict-backed store for Reservation instances, keyed by integer id."""

    def __init__(self) -> None:
        self._store: dict[int, Reservation] = {}
        self._next_id = 1

    def add(self, reservation: Reservation) -> Reservation:
        if reservation.id is None:
            reservation.id = self._next_id
        self._next_id = max(self._next_id, reservation.id + 1)
        self._store[reservation.id] = reservation
        return reservation

    def clear(self) -> None:
        self._store.clear()
        self._next_id = 1

    def get(self, reservation_id: int) -> Reservation | None:
        return self._store.get(reservation_id)

    def update(self, reservation: Reservation) -> None:
        self._store[reservation.id] = reservation

    def delete(self, reservation_id: int) -> None:
        self._store.pop(reservation_id, None)

    def delete_for_unit(self, unit_id: int) -> None:
        """Remove every reservation belonging to a unit (cascade)."""
        to_remove = [rid for rid, r in self._store.items() if r.unit_id == unit_id]
        for rid in to_remove:
            del self._store[rid]

    def list_all(self) -> list[Reservation]:
        return [self._store[rid] for rid in sorted(self._store)]

    def find_for_unit(
        self, unit_id: int, exclude_id: int | None = None
    ) -> list[Reservation]:
        return [
            r
            for r in self._store.values()
            if r.unit_id == unit_id and (exclude_id is None or r.id != exclude_id)
        ]

    def find_overlapping_day(self, unit_id: int, day: date) -> list[Reservation]:
        """Return the unit's reservations occupying the night of ``day``."""
        return find_conflicts(day, day + ONE_DAY, self.find_for_unit(unit_id))


# ---------------------------------------------------------------------------
# Seed data – a small catalogue with a few upcoming stays
# ---------------------------------------------------------------------------


def _seed_units(repo: UnitRepository) -> None:
    repo.add(
        Apartment(
            name="Harbour View Loft",
            description="Top-floor loft overlooking the marina",
            price=145.0,
            location="Lisbon",
            amenities=["wifi", "kitchen", "washer"],
            number_of_bedrooms=2,
            number_of_bathrooms=1,
            square_meters=78,
            floor=5,
            has_elevator=True,
        )
    )
    repo.add(
        Hotel(
            name="Grand Plaza",
            description="City-centre hotel next to the main station",
            price=210.0,
            location="Porto",
            amenities=["wifi", "breakfast", "gym"],
            number_of_rooms=3,
            star_rating=4,
        )
    )


def _seed_reservations(repo: ReservationRepository) -> None:
    today = date.today()
    repo.add(
        Reservation(
            unit_id=1,
            guest_name="Ana Ferreira",
            start_date=today + timedelta(days=2),
            end_date=today + timedelta(days=6),
        )
    )
    for offset, guest in enumerate(("Tom Baker", "Lena Voss")):
        repo.add(
            Reservation(
                unit_id=2,
                guest_name=guest,
                start_date=today + timedelta(days=1 + offset),
                end_date=today + timedelta(days=4 + offset),
            )
        )


def create_unit_repository() -> UnitRepository:
    """Return a UnitRepository pre-loaded with sample data."""
    repo = UnitRepository()
    _seed_units(repo)
    return repo


def create_reservation_repository() -> ReservationRepository:
    """Return a ReservationRepository pre-loaded with sample stays for the sample units."""
    repo = ReservationRepository()
    _seed_reservations(repo)
    return repo
