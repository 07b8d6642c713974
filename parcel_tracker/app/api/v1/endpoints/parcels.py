"""
Parcel API Endpoints.

Exposes parcel registration, lookup and lifecycle changes.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from parcel_tracker.app.core.dependencies import get_parcel_service, get_parcel_store
from parcel_tracker.app.models.parcel import INT64_MAX, INT64_MIN
from parcel_tracker.app.schemas.parcel import AddressUpdate, ParcelCreate, ParcelRecord
from parcel_tracker.app.services.parcel_service import ParcelService
from parcel_tracker.app.services.parcel_store import ParcelStore

router = APIRouter(tags=["Parcels"])


@router.post("/parcels", response_model=ParcelRecord, status_code=status.HTTP_201_CREATED)
async def register_parcel(
    parcel_data: ParcelCreate,
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Register a new parcel.

    The parcel starts in status ``registered`` with the current UTC time.
    """
    return await service.register(parcel_data.client, parcel_data.address)


@router.get("/parcels/{number}", response_model=ParcelRecord)
async def get_parcel(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    store: ParcelStore = Depends(get_parcel_store)
):
    """Get a parcel by number."""
    return await store.get(number)


@router.get("/clients/{client}/parcels", response_model=List[ParcelRecord])
async def list_client_parcels(
    client: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Client ID"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    List all parcels of a client.

    Order is not guaranteed.
    """
    return await service.client_parcels(client)


@router.patch("/parcels/{number}/address", response_model=ParcelRecord)
async def change_parcel_address(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    address_data: AddressUpdate = ...,
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Change the delivery address.

    Only allowed while the parcel is registered.
    """
    return await service.change_address(number, address_data.address)


@router.post("/parcels/{number}/next-status", response_model=ParcelRecord)
async def advance_parcel_status(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Advance the parcel to its next status (registered → sent → delivered)."""
    return await service.next_status(number)


@router.delete("/parcels/{number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parcel(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Delete a parcel.

    Only allowed while the parcel is registered.
    """
    await service.delete(number)
