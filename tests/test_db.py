"""Tests for the SQLite gateway."""

import sqlite3

import pytest

from travel_agency_api.app.core.config import Settings
from travel_agency_api.app.core.db import MIGRATIONS, Database
from travel_agency_api.app.core.exceptions import ConstraintViolationError, StoreError


def test_init_db_applies_all_migrations_once(database):
    database.init_db()
    with database.session() as session:
        versions = [row["version"] for row in session.fetch_all("SELECT version FROM migrations")]
        tables = {
            row["name"]
            for row in session.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert versions == [version for version, _ in MIGRATIONS]
    assert {"Client", "Trip", "Country", "Country_Trip", "Client_Trip"} <= tables


def test_session_commits_on_success(database):
    with database.session() as session:
        client_id = session.insert(
            "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)",
            ("Jan", "Kowalski", "jan@x.com"),
        )
    with database.session() as session:
        assert session.scalar("SELECT Email FROM Client WHERE IdClient = ?", (client_id,)) == "jan@x.com"


def test_session_rolls_back_on_error(database):
    with pytest.raises(RuntimeError):
        with database.session() as session:
            session.insert(
                "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)",
                ("Jan", "Kowalski", "jan@x.com"),
            )
            raise RuntimeError("boom")
    with database.session() as session:
        assert session.scalar("SELECT COUNT(*) FROM Client") == 0


def test_scalar_returns_none_without_rows(database):
    with database.session() as session:
        assert session.scalar("SELECT MaxPeople FROM Trip WHERE IdTrip = ?", (999,)) is None


def test_execute_returns_rowcount(database):
    with database.session() as session:
        assert session.execute("UPDATE Trip SET Description = ? WHERE MaxPeople > ?", ("x", 1)) == 2


def test_parameters_are_bound_not_interpolated(database):
    hostile = "x'); DROP TABLE Client; --"
    with database.session() as session:
        client_id = session.insert(
            "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)",
            (hostile, "Nowak", "ana@x.com"),
        )
        assert session.scalar("SELECT FirstName FROM Client WHERE IdClient = ?", (client_id,)) == hostile


def test_duplicate_enrollment_is_unique_violation(database):
    with database.session() as session:
        client_id = session.insert(
            "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)", ("A", "B", "a@x.com")
        )
        session.insert(
            "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
            (client_id, 3, 20240315),
        )
    with pytest.raises(ConstraintViolationError) as exc_info:
        with database.session() as session:
            session.insert(
                "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
                (client_id, 3, 20240316),
            )
    assert exc_info.value.is_unique_violation
    assert not exc_info.value.is_capacity_violation


def test_capacity_trigger_rejects_insert_over_max_people(database):
    with pytest.raises(ConstraintViolationError) as exc_info:
        with database.session() as session:
            first = session.insert(
                "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)", ("A", "B", "a@x.com")
            )
            second = session.insert(
                "INSERT INTO Client (FirstName, LastName, Email) VALUES (?, ?, ?)", ("C", "D", "c@x.com")
            )
            # Trip 2 has room for one person.
            session.insert(
                "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
                (first, 2, 20240315),
            )
            session.insert(
                "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
                (second, 2, 20240315),
            )
    assert exc_info.value.is_capacity_violation


def test_foreign_keys_are_enforced(database):
    with pytest.raises(ConstraintViolationError):
        with database.session() as session:
            session.insert(
                "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
                (12345, 1, 20240315),
            )


def test_sql_errors_become_store_errors(database):
    with pytest.raises(StoreError) as exc_info:
        with database.session() as session:
            session.fetch_all("SELECT * FROM NoSuchTable")
    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
    assert not isinstance(exc_info.value, ConstraintViolationError)


def test_in_memory_database_is_refused():
    with pytest.raises(ValueError):
        Database(Settings(database_url=":memory:"))


def test_database_paths(tmp_path):
    absolute = tmp_path / "agency.db"
    assert Database(Settings(database_url=str(absolute))).path == str(absolute)
    assert Database(Settings(database_url=f"sqlite:///{absolute}")).path == str(absolute)


def test_relative_path_resolves_against_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    db = Database(Settings(database_url="data/agency.db"))

    assert db.path == str((tmp_path / "data" / "agency.db").resolve())
