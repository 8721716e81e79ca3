"""Fatal errors raised by the availability engine.

A booking that is merely denied is not an error: it comes back as a
``Decision`` with ``allowed=False``. Everything here aborts the current
operation and is left to the caller to map onto a transport status.
"""

from __future__ import annotations


class LodgingError(Exception):
    """Base class for all lodging service errors."""


class UnitNotFoundError(LodgingError):
    def __init__(self, unit_id: int) -> None:
        self.unit_id = unit_id
        super().__init__("Accommodation not found")


class UnsupportedUnitKindError(LodgingError):
    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Unsupported accommodation type: {kind}")


class SearchHorizonExhaustedError(LodgingError):
    """No free day was found before the search horizon ran out."""

    def __init__(self, horizon_days: int) -> None:
        self.horizon_days = horizon_days
        super().__init__(f"No available date found within {horizon_days} days")

