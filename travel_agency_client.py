"""Travel agency API client.

A small wrapper around the REST API served by
``travel_agency_api.app.main``.  It uses the ``requests`` library and
exposes one method per operation:

* :meth:`list_trips` – the trip catalog with country names.
* :meth:`list_client_trips` – trips a client is registered for.
* :meth:`create_client` – create a client and return its identifier.
* :meth:`register_for_trip` – register a client for a trip.
* :meth:`unregister_from_trip` – remove a registration.

Every method returns a ``(data, error)`` tuple.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary with
``status_code`` (``None`` for network failures) and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class TravelAgencyAPI:
    """Client for the travel agency API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/v1",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            prefix: Path prefix under which the versioned API is mounted.
            timeout: Seconds to wait for each response.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + prefix
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` holds the parsed JSON
            body (``None`` for empty responses such as 204).
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = err_json.get("detail") or str(err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------
    def list_trips(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/trips")
        if error:
            return [], error
        return data or [], None

    # ------------------------------------------------------------------
    # Clients and registrations
    # ------------------------------------------------------------------
    def list_client_trips(self, client_id: int) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", f"/clients/{client_id}/trips")
        if error:
            return [], error
        return data or [], None

    def create_client(
        self,
        first_name: str,
        last_name: str,
        email: str,
        telephone: Optional[str] = None,
        pesel: Optional[str] = None,
    ) -> Tuple[Optional[int], Optional[ApiError]]:
        """Create a client.

        Returns:
            A tuple ``(client_id, error)``.
        """
        payload = {
            "FirstName": first_name,
            "LastName": last_name,
            "Email": email,
            "Telephone": telephone,
            "Pesel": pesel,
        }
        data, error = self._request("POST", "/clients", json_body=payload)
        if error:
            return None, error
        return data["IdClient"], None

    def register_for_trip(self, client_id: int, trip_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("PUT", f"/clients/{client_id}/trips/{trip_id}")
        if error:
            return None, error
        return data, None

    def unregister_from_trip(self, client_id: int, trip_id: int) -> Tuple[bool, Optional[ApiError]]:
        _, error = self._request("DELETE", f"/clients/{client_id}/trips/{trip_id}")
        if error:
            return False, error
        return True, None
