"""Forward search for the first day a unit can take another guest."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from lodging.domain.errors import SearchHorizonExhaustedError
from lodging.domain.models import SearchResult
from lodging.repos.memory import ReservationRepository, UnitRepository
from lodging.services.conflicts import to_calendar_day
from lodging.services.validation import ConflictResolutionService

logger = logging.getLogger(__name__)

SEARCH_HORIZON_DAYS = 365


class NextAvailableDateService:
    def __init__(
        self,
        unit_repo: UnitRepository,
        reservation_repo: ReservationRepository,
        horizon_days: int = SEARCH_HORIZON_DAYS,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.resolver = ConflictResolutionService(unit_repo, reservation_repo)
        self.horizon_days = horizon_days

    def find_next_available_date(
        self, unit_id: int, from_date: date | datetime | str
    ) -> SearchResult:
        """Scan forward one day at a time from ``from_date``.

        A day is free when the night starting on it still has room under the
        unit's policy. When ``from_date`` itself is busy, the result lists the
        reservations occupying ``from_date`` (not the day eventually found).

        Raises:
            UnitNotFoundError: the unit does not exist.
            SearchHorizonExhaustedError: nothing free within ``horizon_days``.
        """
        requested = to_calendar_day(from_date)
        kind = self.resolver.resolve_unit_kind(unit_id)
        policy = self.resolver.policy_for(kind, unit_id)

        for offset in range(self.horizon_days):
            day = requested + timedelta(days=offset)
            occupying = self.reservation_repo.find_overlapping_day(unit_id, day)
            logger.debug("Unit %s on %s: %d occupying", unit_id, day, len(occupying))
            if not policy.admits(len(occupying)):
                continue

            if day == requested:
                return SearchResult(
                    unit_id=unit_id,
                    unit_kind=kind,
                    requested_date=requested,
                    next_available_date=day,
                    is_available_on_requested_date=True,
                )

            conflicting = self.reservation_repo.find_overlapping_day(unit_id, requested)
            return SearchResult(
                unit_id=unit_id,
                unit_kind=kind,
                requested_date=requested,
                next_available_date=day,
                is_available_on_requested_date=False,
                conflicting_reservations=[r.summary() for r in conflicting],
            )

        logger.warning(
            "Unit %s has no free day within %d days of %s",
            unit_id,
            self.horizon_days,
            requested,
        )
        raise SearchHorizonExhaustedError(self.horizon_days)
