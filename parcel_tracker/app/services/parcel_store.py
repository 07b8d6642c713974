"""
Parcel store.

All reads and writes of the ``parcel`` table go through ``ParcelStore``.
The store wraps a session owned by the caller: it never opens, closes or
pools connections, and it does not log or retry. Status values are opaque
strings here; lifecycle policy belongs to ``ParcelService``.
"""

from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_tracker.app.core.exceptions import ParcelNotFoundError, ParcelQueryError
from parcel_tracker.app.models.parcel import INT64_MAX, INT64_MIN, Parcel
from parcel_tracker.app.schemas.parcel import ParcelRecord

# Driver errors: SQLAlchemy wraps DBAPI errors, but integer overflow on bind
# parameters comes straight from the sqlite3 module
DB_ERRORS = (SQLAlchemyError, OverflowError)


def _storable(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


class ParcelStore:
    """Single-statement CRUD over the parcel table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, parcel: ParcelRecord) -> int:
        """
        Insert a parcel and return its generated number.

        ``parcel.number`` is ignored. Database errors propagate unchanged.
        """
        stmt = (
            insert(Parcel)
            .values(
                client=parcel.client,
                status=parcel.status,
                address=parcel.address,
                created_at=parcel.created_at,
            )
            .returning(Parcel.number)
        )
        try:
            result = await self.db.execute(stmt)
            number = result.scalar_one()
            await self.db.commit()
        except DB_ERRORS:
            await self.db.rollback()
            raise
        return number

    async def get(self, number: int) -> ParcelRecord:
        """
        Fetch a parcel by number.

        Raises:
            ParcelNotFoundError: no row has this number
            ParcelQueryError: the database failed; chained to the cause

        Both carry a zero-value record in ``exc.parcel``.
        """
        if not _storable(number):
            raise ParcelNotFoundError(number)

        try:
            result = await self.db.execute(
                select(Parcel)
                .where(Parcel.number == number)
                .execution_options(populate_existing=True)
            )
            row = result.scalar_one_or_none()
        except DB_ERRORS as exc:
            await self.db.rollback()
            raise ParcelQueryError(number) from exc

        if row is None:
            raise ParcelNotFoundError(number)

        return ParcelRecord.model_validate(row)

    async def get_by_client(self, client: int) -> List[ParcelRecord]:
        """Return every parcel of a client, in no particular order."""
        if not _storable(client):
            return []

        try:
            result = await self.db.execute(
                select(Parcel)
                .where(Parcel.client == client)
                .execution_options(populate_existing=True)
            )
        except DB_ERRORS:
            await self.db.rollback()
            raise
        return [ParcelRecord.model_validate(row) for row in result.scalars().all()]

    async def set_address(self, number: int, address: str) -> None:
        if not _storable(number):
            return
        await self._write(
            update(Parcel).where(Parcel.number == number).values(address=address)
        )

    async def set_status(self, number: int, status: str) -> None:
        if not _storable(number):
            return
        await self._write(
            update(Parcel).where(Parcel.number == number).values(status=status)
        )

    async def delete(self, number: int) -> None:
        if not _storable(number):
            return
        await self._write(delete(Parcel).where(Parcel.number == number))

    async def _write(self, stmt) -> None:
        # Failed writes are rolled back and the original error re-raised
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except DB_ERRORS:
            await self.db.rollback()
            raise
