"""
Parcel Pydantic schemas.

``ParcelRecord`` is the domain record handed out by the store; the
remaining models are request bodies for the HTTP layer.
"""

from pydantic import BaseModel, Field

from parcel_tracker.app.models.parcel import INT64_MAX, INT64_MIN


class ParcelRecord(BaseModel):
    """
    A tracked parcel.

    The zero value (``ParcelRecord()``) has ``number == 0`` and stands for
    "not found / not yet assigned".
    """
    number: int = 0
    client: int = 0
    status: str = ""
    address: str = ""
    created_at: str = ""

    class Config:
        from_attributes = True


class ParcelCreate(BaseModel):
    """Schema for registering a new parcel."""
    client: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="Owning client identifier")
    address: str = Field(..., min_length=1, description="Delivery address")


class AddressUpdate(BaseModel):
    """Schema for changing the delivery address."""
    address: str = Field(..., min_length=1, description="New delivery address")
