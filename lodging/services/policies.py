"""Availability policies: how many overlapping reservations a unit tolerates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Protocol

from lodging.domain.models import Decision, Reservation
from lodging.services.conflicts import find_conflicts

logger = logging.getLogger(__name__)


class AvailabilityPolicy(Protocol):
    def admits(self, overlapping_count: int) -> bool:
        """Whether a new reservation fits alongside ``overlapping_count`` others."""
        ...

    def can_book(
        self,
        start_date: date,
        end_date: date,
        existing: Sequence[Reservation],
    ) -> Decision:
        ...


class ExclusivePolicy:
    """Apartment-style units: a single reservation per night."""

    reason = "Apartment is already booked for these dates"

    def admits(self, overlapping_count: int) -> bool:
        return overlapping_count == 0

    def can_book(
        self,
        start_date: date,
        end_date: date,
        existing: Sequence[Reservation],
    ) -> Decision:
        conflicts = find_conflicts(start_date, end_date, existing)
        if self.admits(len(conflicts)):
            return Decision.allow()
        logger.info(
            "Exclusive unit busy for %s..%s (conflicts: %s)",
            start_date,
            end_date,
            [c.id for c in conflicts],
        )
        return Decision.deny(self.reason)


class PooledCapacityPolicy:
    """Hotel-style units: up to ``capacity`` interchangeable rooms per night.

    Every overlapping reservation takes one room for the whole candidate
    range, regardless of party size or on which night it overlaps.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity

    def admits(self, overlapping_count: int) -> bool:
        return overlapping_count < self.capacity

    def can_book(
        self,
        start_date: date,
        end_date: date,
        existing: Sequence[Reservation],
    ) -> Decision:
        overlapping_count = len(find_conflicts(start_date, end_date, existing))
        if self.admits(overlapping_count):
            return Decision.allow()
        logger.info(
            "Pooled unit full for %s..%s (%d/%d rooms taken)",
            start_date,
            end_date,
            overlapping_count,
            self.capacity,
        )
        return Decision.deny(f"All {self.capacity} rooms are booked for these dates")
