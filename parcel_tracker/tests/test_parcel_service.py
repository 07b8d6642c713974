"""
Tests for the parcel lifecycle service.

Covers registration, status progression and the registered-only guards.
"""

import re

import pytest

from parcel_tracker.app.core.exceptions import InvalidParcelStateError, ParcelNotFoundError
from parcel_tracker.app.models.parcel_enums import ParcelStatus


# TEST 1: Register
@pytest.mark.asyncio
async def test_register(service, store):
    """New parcels are stored as registered with an RFC3339 UTC timestamp."""
    parcel = await service.register(1000, "Pskov, Voennaya 15")

    assert parcel.number != 0
    assert parcel.status == ParcelStatus.REGISTERED.value
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", parcel.created_at)
    assert await store.get(parcel.number) == parcel


# TEST 2: Status progression
@pytest.mark.asyncio
async def test_next_status_walks_lifecycle(service, store):
    """registered -> sent -> delivered, then stays delivered."""
    parcel = await service.register(1000, "test")

    assert (await service.next_status(parcel.number)).status == "sent"
    assert (await service.next_status(parcel.number)).status == "delivered"
    assert (await service.next_status(parcel.number)).status == "delivered"
    assert (await store.get(parcel.number)).status == "delivered"


# TEST 3: Unknown status
@pytest.mark.asyncio
async def test_next_status_rejects_unknown_status(service, store):
    """A status outside the lifecycle cannot be advanced."""
    parcel = await service.register(1000, "test")
    await store.set_status(parcel.number, "held at customs")

    with pytest.raises(InvalidParcelStateError) as exc_info:
        await service.next_status(parcel.number)

    assert exc_info.value.status_code == 409
    assert (await store.get(parcel.number)).status == "held at customs"


# TEST 4: Change address while registered
@pytest.mark.asyncio
async def test_change_address(service, store):
    parcel = await service.register(1000, "old")

    updated = await service.change_address(parcel.number, "new")

    assert updated.address == "new"
    assert (await store.get(parcel.number)).address == "new"


# TEST 5: Change address after sending
@pytest.mark.asyncio
async def test_change_address_after_sent_is_rejected(service, store):
    """Address is frozen once the parcel leaves."""
    parcel = await service.register(1000, "old")
    await service.next_status(parcel.number)

    with pytest.raises(InvalidParcelStateError):
        await service.change_address(parcel.number, "new")

    assert (await store.get(parcel.number)).address == "old"


# TEST 6: Delete while registered
@pytest.mark.asyncio
async def test_delete(service, store):
    parcel = await service.register(1000, "test")

    await service.delete(parcel.number)

    with pytest.raises(ParcelNotFoundError):
        await store.get(parcel.number)


# TEST 7: Delete after sending
@pytest.mark.asyncio
async def test_delete_after_sent_is_rejected(service, store):
    parcel = await service.register(1000, "test")
    await service.next_status(parcel.number)

    with pytest.raises(InvalidParcelStateError):
        await service.delete(parcel.number)

    assert (await store.get(parcel.number)).status == "sent"


# TEST 8: Missing parcel
@pytest.mark.asyncio
async def test_operations_on_missing_parcel(service):
    """Lifecycle operations report missing parcels instead of silently doing nothing."""
    with pytest.raises(ParcelNotFoundError):
        await service.next_status(12345)
    with pytest.raises(ParcelNotFoundError):
        await service.change_address(12345, "x")
    with pytest.raises(ParcelNotFoundError):
        await service.delete(12345)


# TEST 9: Client parcels
@pytest.mark.asyncio
async def test_client_parcels(service):
    first = await service.register(7, "a")
    second = await service.register(7, "b")
    await service.register(8, "c")

    parcels = await service.client_parcels(7)

    assert {p.number for p in parcels} == {first.number, second.number}
