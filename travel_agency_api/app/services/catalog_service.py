"""
Read-only access to the trip catalog.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Dict, List

from travel_agency_api.app.core.db import Database
from travel_agency_api.app.schemas.trip import TripSummary


logger = logging.getLogger(__name__)


class CatalogService:
    """Lists trips together with the countries they visit."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_trips(self) -> List[TripSummary]:
        return await asyncio.to_thread(self._list_trips)

    def _list_trips(self) -> List[TripSummary]:
        # Countries for all trips are loaded with a single query and grouped
        # here instead of issuing one query per trip.
        with self.db.session() as session:
            trip_rows = session.fetch_all(
                "SELECT IdTrip, Name, Description, DateFrom, DateTo, MaxPeople FROM Trip ORDER BY IdTrip"
            )
            country_rows = session.fetch_all(
                """
                SELECT ct.IdTrip, c.Name
                FROM Country_Trip ct
                JOIN Country c ON c.IdCountry = ct.IdCountry
                """
            )

        countries: Dict[int, List[str]] = defaultdict(list)
        for row in country_rows:
            countries[row["IdTrip"]].append(row["Name"])

        logger.debug("Loaded %d trips", len(trip_rows))
        return [
            TripSummary.model_validate({**dict(row), "Countries": countries.get(row["IdTrip"], [])})
            for row in trip_rows
        ]
