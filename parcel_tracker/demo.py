"""
Parcel lifecycle walkthrough.

Registers a parcel, changes its address, advances its status and tries to
delete it, logging each step. Run after configuring DATABASE_URL:

    python -m parcel_tracker.demo
"""

import asyncio

from parcel_tracker.app.core.config import settings
from parcel_tracker.app.core.exceptions import InvalidParcelStateError
from parcel_tracker.app.core.observability import logger, setup_logging
from parcel_tracker.app.db.session import AsyncSessionLocal, engine, init_db
from parcel_tracker.app.services.parcel_service import ParcelService
from parcel_tracker.app.services.parcel_store import ParcelStore

CLIENT = 1


async def log_client_parcels(service: ParcelService, client: int) -> None:
    parcels = await service.client_parcels(client)
    logger.info("Client %d parcels:", client)
    for parcel in parcels:
        logger.info(
            "  #%d to %s from client %d, registered %s, status %s",
            parcel.number, parcel.address, parcel.client, parcel.created_at, parcel.status,
        )


async def run_demo():
    await init_db()

    async with AsyncSessionLocal() as db:
        service = ParcelService(ParcelStore(db))

        parcel = await service.register(CLIENT, "Pskov, Voennaya 15")
        await service.change_address(parcel.number, "Saratov, Verkhnyaya 3")
        await service.next_status(parcel.number)
        await log_client_parcels(service, CLIENT)

        # Sent parcels can no longer be deleted
        try:
            await service.delete(parcel.number)
        except InvalidParcelStateError as exc:
            logger.warning(exc.message)
        await log_client_parcels(service, CLIENT)

        # A freshly registered one can
        parcel = await service.register(CLIENT, "Pskov, Voennaya 15")
        await service.delete(parcel.number)
        await log_client_parcels(service, CLIENT)

    await engine.dispose()


if __name__ == "__main__":
    setup_logging(settings.log_level, settings.log_json)
    asyncio.run(run_demo())
