"""Pytest configuration and shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` with the schema
applied and a small trip catalog loaded:

* trip 1 "Alpine Lakes"  - MaxPeople 2, Austria and Switzerland
* trip 2 "Baltic Coast"  - MaxPeople 1, Poland
* trip 3 "Desert Nights" - MaxPeople 3, no countries
"""

from datetime import date

import pytest

from travel_agency_api.app.core.config import Settings
from travel_agency_api.app.core.db import Database
from travel_agency_api.app.services.catalog_service import CatalogService
from travel_agency_api.app.services.enrollment_service import EnrollmentService


TODAY = date(2024, 3, 15)

TRIPS = [
    (1, "Alpine Lakes", "Hiking around alpine lakes", "2024-07-01", "2024-07-10", 2),
    (2, "Baltic Coast", None, "2024-08-05", "2024-08-12", 1),
    (3, "Desert Nights", "Stargazing tour", "2024-11-01", "2024-11-07", 3),
]

COUNTRIES = [(1, "Austria"), (2, "Switzerland"), (3, "Poland")]

COUNTRY_TRIPS = [(1, 1), (2, 1), (3, 2)]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "travel_agency_test.db"),
        database_timeout=10.0,
        log_level="DEBUG",
    )


@pytest.fixture
def database(settings) -> Database:
    db = Database(settings)
    db.init_db()
    with db.session() as session:
        for trip in TRIPS:
            session.insert(
                "INSERT INTO Trip (IdTrip, Name, Description, DateFrom, DateTo, MaxPeople) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                trip,
            )
        for country in COUNTRIES:
            session.insert("INSERT INTO Country (IdCountry, Name) VALUES (?, ?)", country)
        for link in COUNTRY_TRIPS:
            session.insert("INSERT INTO Country_Trip (IdCountry, IdTrip) VALUES (?, ?)", link)
    return db


@pytest.fixture
def enrollment_service(database) -> EnrollmentService:
    return EnrollmentService(database, today=lambda: TODAY)


@pytest.fixture
def catalog_service(database) -> CatalogService:
    return CatalogService(database)


@pytest.fixture
def make_client(database):
    """Insert a client directly and return its id."""

    def _make_client(first_name: str = "Ana", last_name: str = "Nowak", email: str = "ana@x.com") -> int:
        with database.session() as session:
            return session.insert(
                "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)",
                (first_name, last_name, email),
            )

    return _make_client


@pytest.fixture
def enrolled_count(database):
    def _enrolled_count(trip_id: int) -> int:
        with database.session() as session:
            return session.scalar("SELECT COUNT(*) FROM Client_Trip WHERE IdTrip = ?", (trip_id,))

    return _enrolled_count
