"""
Service dependencies for FastAPI.

Builds the parcel store and service on top of the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_tracker.app.db.session import get_db
from parcel_tracker.app.services.parcel_service import ParcelService
from parcel_tracker.app.services.parcel_store import ParcelStore


async def get_parcel_store(db: AsyncSession = Depends(get_db)) -> ParcelStore:
    return ParcelStore(db)


async def get_parcel_service(store: ParcelStore = Depends(get_parcel_store)) -> ParcelService:
    return ParcelService(store)
