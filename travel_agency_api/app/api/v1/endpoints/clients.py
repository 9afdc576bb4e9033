"""
Client endpoints for API v1.

These routes create clients and manage their trip registrations.  They
delegate to ``EnrollmentService`` and translate its exceptions into
HTTP errors: missing client, trip or registration give 404, a full trip
gives 400 and a duplicate registration gives 409.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status

from travel_agency_api.app.api.dependencies import get_enrollment_service
from travel_agency_api.app.core.exceptions import (
    AlreadyRegisteredError,
    CapacityExceededError,
    InputValidationError,
    NotFoundError,
)
from travel_agency_api.app.schemas.client import ClientCreate, ClientCreated
from travel_agency_api.app.schemas.trip import EnrollmentConfirmation, EnrollmentDetail
from travel_agency_api.app.services.enrollment_service import EnrollmentService


router = APIRouter()


@router.get(
    "/{client_id}/trips",
    response_model=List[EnrollmentDetail],
    name="list_client_trips",
)
async def list_client_trips(
    client_id: int = Path(..., description="ID of the client"),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> List[EnrollmentDetail]:
    """Return all trips the client is registered for, with registration and payment dates."""
    try:
        return await service.list_enrollments(client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "",
    response_model=ClientCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    data: ClientCreate,
    request: Request,
    response: Response,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> ClientCreated:
    """Create a client and return its ID.

    The ``Location`` header points at the new client's trip list.
    """
    try:
        client_id = await service.create_client(
            data.first_name,
            data.last_name,
            str(data.email),
            telephone=data.telephone,
            pesel=data.pesel,
        )
    except InputValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    response.headers["Location"] = str(request.url_for("list_client_trips", client_id=client_id))
    return ClientCreated(id_client=client_id)


@router.put(
    "/{client_id}/trips/{trip_id}",
    response_model=EnrollmentConfirmation,
)
async def register_client_to_trip(
    client_id: int = Path(..., description="ID of the client"),
    trip_id: int = Path(..., description="ID of the trip"),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentConfirmation:
    """Register a client for a trip after checking both exist and the trip is not full."""
    try:
        return await service.register_client(client_id, trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except CapacityExceededError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete(
    "/{client_id}/trips/{trip_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def unregister_client_from_trip(
    client_id: int = Path(..., description="ID of the client"),
    trip_id: int = Path(..., description="ID of the trip"),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> Response:
    """Remove a client's registration for a trip."""
    try:
        await service.unregister_client(client_id, trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
