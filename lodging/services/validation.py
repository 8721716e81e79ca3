"""Decide whether a new or edited reservation fits a unit's inventory."""

from __future__ import annotations

import logging
from datetime import date

from lodging.domain.errors import UnitNotFoundError, UnsupportedUnitKindError
from lodging.domain.models import Decision, UnitKind
from lodging.repos.memory import ReservationRepository, UnitRepository
from lodging.services.policies import (
    AvailabilityPolicy,
    ExclusivePolicy,
    PooledCapacityPolicy,
)

logger = logging.getLogger(__name__)


class ConflictResolutionService:
    """Checks candidate stays against a unit's existing reservations.

    Reads only. Callers that go on to write the reservation must hold the
    check and the write in one transaction (or lock), otherwise two requests
    can both take the last free slot.
    """

    def __init__(
        self,
        unit_repo: UnitRepository,
        reservation_repo: ReservationRepository,
    ) -> None:
        self.unit_repo = unit_repo
        self.reservation_repo = reservation_repo

    def validate_reservation(
        self,
        unit_id: int,
        unit_kind: UnitKind | str,
        start_date: date,
        end_date: date,
        exclude_reservation_id: int | None = None,
    ) -> Decision:
        """Evaluate [start_date, end_date) for ``unit_id``.

        Pass ``exclude_reservation_id`` when validating an edit so the
        reservation is not counted against itself.
        """
        existing = self.reservation_repo.find_for_unit(
            unit_id, exclude_id=exclude_reservation_id
        )
        policy = self.policy_for(unit_kind, unit_id)
        decision = policy.can_book(start_date, end_date, existing)
        logger.debug(
            "Validated unit %s for %s..%s: allowed=%s",
            unit_id,
            start_date,
            end_date,
            decision.allowed,
        )
        return decision

    def resolve_unit_kind(self, unit_id: int) -> UnitKind:
        kind = self.unit_repo.get_unit_kind(unit_id)
        if kind is None:
            raise UnitNotFoundError(unit_id)
        return kind

    def policy_for(self, unit_kind: UnitKind | str, unit_id: int) -> AvailabilityPolicy:
        try:
            kind = UnitKind(unit_kind)
        except ValueError:
            raise UnsupportedUnitKindError(unit_kind) from None

        if kind == UnitKind.APARTMENT:
            return ExclusivePolicy()

        capacity = self.unit_repo.get_unit_capacity(unit_id)
        if capacity is None:
            raise UnitNotFoundError(unit_id)
        return PooledCapacityPolicy(capacity)
