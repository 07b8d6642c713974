"""
Parcel lifecycle service.

Applies the registered → sent → delivered policy on top of ``ParcelStore``.
Address changes and deletion are only allowed while a parcel is still
registered.
"""

import logging
from datetime import datetime, timezone
from typing import List

from parcel_tracker.app.core.exceptions import InvalidParcelStateError
from parcel_tracker.app.models.parcel_enums import NEXT_STATUS, ParcelStatus
from parcel_tracker.app.schemas.parcel import ParcelRecord
from parcel_tracker.app.services.parcel_store import ParcelStore

logger = logging.getLogger(__name__)

RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp() -> str:
    """Current UTC time as an RFC3339 string with second precision."""
    return datetime.now(timezone.utc).strftime(RFC3339_UTC)


class ParcelService:
    """Lifecycle operations for parcels."""

    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> ParcelRecord:
        """
        Register a new parcel for a client.

        Args:
            client: Owning client identifier
            address: Delivery address

        Returns:
            The stored parcel with its number populated
        """
        parcel = ParcelRecord(
            client=client,
            status=ParcelStatus.REGISTERED.value,
            address=address,
            created_at=utc_timestamp(),
        )
        parcel.number = await self.store.add(parcel)

        logger.info(
            "Parcel %d registered for client %d at %s to address %s",
            parcel.number, parcel.client, parcel.created_at, parcel.address,
        )
        return parcel

    async def client_parcels(self, client: int) -> List[ParcelRecord]:
        parcels = await self.store.get_by_client(client)
        logger.debug("Client %d has %d parcel(s)", client, len(parcels))
        return parcels

    async def next_status(self, number: int) -> ParcelRecord:
        """
        Move a parcel one step along its lifecycle.

        A delivered parcel is returned unchanged.

        Raises:
            ParcelNotFoundError: If parcel doesn't exist
            InvalidParcelStateError: If the stored status is not part of the lifecycle
        """
        parcel = await self.store.get(number)

        if parcel.status == ParcelStatus.DELIVERED.value:
            return parcel

        next_status = NEXT_STATUS.get(parcel.status)
        if next_status is None:
            raise InvalidParcelStateError(number, parcel.status, "advance")

        await self.store.set_status(number, next_status)
        logger.info("Parcel %d status changed: %s -> %s", number, parcel.status, next_status)

        parcel.status = next_status
        return parcel

    async def change_address(self, number: int, address: str) -> ParcelRecord:
        """
        Change the delivery address of a registered parcel.

        Raises:
            ParcelNotFoundError: If parcel doesn't exist
            InvalidParcelStateError: If the parcel has already been sent
        """
        parcel = await self.store.get(number)
        self._require_registered(parcel, "change address of")

        await self.store.set_address(number, address)
        logger.info("Parcel %d address changed to %s", number, address)

        parcel.address = address
        return parcel

    async def delete(self, number: int) -> None:
        """
        Delete a registered parcel.

        Raises:
            ParcelNotFoundError: If parcel doesn't exist
            InvalidParcelStateError: If the parcel has already been sent
        """
        parcel = await self.store.get(number)
        self._require_registered(parcel, "delete")

        await self.store.delete(number)
        logger.info("Parcel %d deleted", number)

    @staticmethod
    def _require_registered(parcel: ParcelRecord, action: str) -> None:
        if parcel.status != ParcelStatus.REGISTERED.value:
            raise InvalidParcelStateError(parcel.number, parcel.status, action)
