"""
Business logic for clients and trip enrollments.

``EnrollmentService`` creates clients, registers them for trips,
removes registrations and lists a client's trips.  Registration runs
its existence checks, the capacity check and the insert inside one
``BEGIN IMMEDIATE`` transaction, so two clients competing for the last
place on a trip cannot both get it.  Store work is blocking, so every
public coroutine hands it to a worker thread with its own connection.
"""

import asyncio
import logging
from datetime import date
from typing import Callable, List, Optional

from travel_agency_api.app.core.dates import encode_date
from travel_agency_api.app.core.db import Database
from travel_agency_api.app.core.exceptions import (
    AlreadyRegisteredError,
    CapacityExceededError,
    ConstraintViolationError,
    InputValidationError,
    NotFoundError,
)
from travel_agency_api.app.schemas.trip import EnrollmentConfirmation, EnrollmentDetail


logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for clients and their trip registrations."""

    def __init__(self, db: Database, today: Callable[[], date] = date.today) -> None:
        self.db = db
        self.today = today

    async def list_enrollments(self, client_id: int) -> List[EnrollmentDetail]:
        """Return every trip the client is registered for.

        Raises ``NotFoundError`` if the client does not exist.  A client
        without registrations gets an empty list.
        """
        return await asyncio.to_thread(self._list_enrollments, client_id)

    async def create_client(
        self,
        first_name: str,
        last_name: str,
        email: str,
        telephone: Optional[str] = None,
        pesel: Optional[str] = None,
    ) -> int:
        """Insert a new client and return its ``IdClient``.

        Email and PESEL are not required to be unique.
        """
        return await asyncio.to_thread(
            self._create_client, first_name, last_name, email, telephone, pesel
        )

    async def register_client(self, client_id: int, trip_id: int) -> EnrollmentConfirmation:
        """Register a client for a trip.

        Checks run in this order: client exists, trip exists, pair not yet
        registered, trip has a free place.  Raises ``NotFoundError``,
        ``CapacityExceededError`` or ``AlreadyRegisteredError``.
        """
        return await asyncio.to_thread(self._register_client, client_id, trip_id)

    async def unregister_client(self, client_id: int, trip_id: int) -> None:
        """Remove a registration; ``NotFoundError`` if there is none."""
        await asyncio.to_thread(self._unregister_client, client_id, trip_id)

    def _list_enrollments(self, client_id: int) -> List[EnrollmentDetail]:
        with self.db.session() as session:
            if not self._client_exists(session, client_id):
                raise NotFoundError("client", client_id)
            rows = session.fetch_all(
                """
                SELECT t.IdTrip, t.Name, t.Description, t.DateFrom, t.DateTo, t.MaxPeople,
                       ct.RegisteredAt, ct.PaymentDate
                FROM Client_Trip ct
                JOIN Trip t ON ct.IdTrip = t.IdTrip
                WHERE ct.IdClient = ?
                """,
                (client_id,),
            )
        return [EnrollmentDetail.model_validate(dict(row)) for row in rows]

    def _create_client(
        self,
        first_name: str,
        last_name: str,
        email: str,
        telephone: Optional[str],
        pesel: Optional[str],
    ) -> int:
        required = {"FirstName": first_name, "LastName": last_name, "Email": email}
        missing = [name for name, value in required.items() if not value or not value.strip()]
        if missing:
            raise InputValidationError(f"Required fields missing: {', '.join(missing)}")

        with self.db.session() as session:
            client_id = session.insert(
                """
                INSERT INTO Client (FirstName, LastName, Email, Telephone, Pesel)
                VALUES (?, ?, ?, ?, ?)
                """,
                (first_name, last_name, email, telephone or None, pesel or None),
            )
        logger.info("Created client %s", client_id)
        return client_id

    def _register_client(self, client_id: int, trip_id: int) -> EnrollmentConfirmation:
        registered_at = self.today()
        try:
            with self.db.transaction() as session:
                if not self._client_exists(session, client_id):
                    raise NotFoundError("client", client_id)

                max_people = session.scalar(
                    "SELECT MaxPeople FROM Trip WHERE IdTrip = ?", (trip_id,)
                )
                if max_people is None:
                    raise NotFoundError("trip", trip_id)

                # An existing registration is reported as such even when the trip is full.
                if session.scalar(
                    "SELECT 1 FROM Client_Trip WHERE IdClient = ? AND IdTrip = ?",
                    (client_id, trip_id),
                ) is not None:
                    logger.info("Client %s is already registered for trip %s", client_id, trip_id)
                    raise AlreadyRegisteredError(client_id, trip_id)

                enrolled = session.scalar(
                    "SELECT COUNT(*) FROM Client_Trip WHERE IdTrip = ?", (trip_id,)
                )
                if enrolled >= max_people:
                    raise CapacityExceededError(trip_id, max_people)

                session.insert(
                    "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
                    (client_id, trip_id, encode_date(registered_at)),
                )
        except ConstraintViolationError as exc:
            if exc.is_unique_violation:
                logger.info("Client %s is already registered for trip %s", client_id, trip_id)
                raise AlreadyRegisteredError(client_id, trip_id) from exc
            if exc.is_capacity_violation:
                logger.warning("Capacity trigger rejected client %s for trip %s", client_id, trip_id)
                raise CapacityExceededError(trip_id) from exc
            raise
        except CapacityExceededError:
            logger.info("Trip %s is full; client %s not registered", trip_id, client_id)
            raise

        logger.info("Registered client %s for trip %s", client_id, trip_id)
        return EnrollmentConfirmation(
            id_client=client_id,
            id_trip=trip_id,
            registered_at=registered_at,
        )

    def _unregister_client(self, client_id: int, trip_id: int) -> None:
        with self.db.session() as session:
            deleted = session.execute(
                "DELETE FROM Client_Trip WHERE IdClient = ? AND IdTrip = ?",
                (client_id, trip_id),
            )
        if deleted == 0:
            raise NotFoundError(
                "registration",
                (client_id, trip_id),
                "Registration not found for this client and trip.",
            )
        logger.info("Unregistered client %s from trip %s", client_id, trip_id)

    @staticmethod
    def _client_exists(session, client_id: int) -> bool:
        return session.scalar("SELECT 1 FROM Client WHERE IdClient = ?", (client_id,)) is not None
