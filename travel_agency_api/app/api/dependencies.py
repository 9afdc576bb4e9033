"""
FastAPI dependencies providing the service objects.

``create_app`` builds one ``Database`` and one instance of each service
and stores them on ``app.state``; handlers receive them through these
functions so tests can override them with ``app.dependency_overrides``.
"""

from fastapi import Request

from travel_agency_api.app.services.catalog_service import CatalogService
from travel_agency_api.app.services.enrollment_service import EnrollmentService


def get_enrollment_service(request: Request) -> EnrollmentService:
    return request.app.state.enrollment_service


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service
