"""
Exception types raised by the gateway and the services.

API handlers translate these into HTTP responses; nothing here knows
about HTTP.
"""

from typing import Any, Optional


class TravelAgencyError(Exception):
    """Base class for all application errors."""


class NotFoundError(TravelAgencyError):
    """A client, trip or registration does not exist."""

    def __init__(self, entity: str, identifier: Any, message: Optional[str] = None) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(message or f"{entity.capitalize()} with ID {identifier} not found.")


class InputValidationError(TravelAgencyError):
    """Input for a create operation is missing or malformed."""


class CapacityExceededError(TravelAgencyError):
    """The trip already has ``MaxPeople`` enrolled clients."""

    def __init__(self, trip_id: int, max_people: Optional[int] = None) -> None:
        self.trip_id = trip_id
        self.max_people = max_people
        super().__init__("Maximum number of participants reached for this trip.")


class AlreadyRegisteredError(TravelAgencyError):
    """The client is already enrolled in the trip."""

    def __init__(self, client_id: int, trip_id: int) -> None:
        self.client_id = client_id
        self.trip_id = trip_id
        super().__init__(f"Client {client_id} is already registered for trip {trip_id}.")


class StoreError(TravelAgencyError):
    """The database failed (connectivity, locking, constraints...)."""


class ConstraintViolationError(StoreError):
    """The database rejected a write because of a constraint or trigger."""

    # Message raised by the Client_Trip capacity trigger, see core.db.
    CAPACITY_MESSAGE = "trip capacity exceeded"

    @property
    def is_unique_violation(self) -> bool:
        return "UNIQUE constraint failed" in str(self)

    @property
    def is_capacity_violation(self) -> bool:
        return self.CAPACITY_MESSAGE in str(self)
