"""
Trip catalog endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends

from travel_agency_api.app.api.dependencies import get_catalog_service
from travel_agency_api.app.schemas.trip import TripSummary
from travel_agency_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("", response_model=List[TripSummary])
async def list_trips(
    service: CatalogService = Depends(get_catalog_service),
) -> List[TripSummary]:
    """Retrieve all trips with their basic details and list of countries."""
    return await service.list_trips()
