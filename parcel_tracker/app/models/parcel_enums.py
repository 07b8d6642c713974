"""
Parcel Status Enumeration.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        REGISTERED → SENT → DELIVERED

    The store does not know about these values; only the service does.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"


# Next status for each step of the lifecycle
NEXT_STATUS = {
    ParcelStatus.REGISTERED.value: ParcelStatus.SENT.value,
    ParcelStatus.SENT.value: ParcelStatus.DELIVERED.value,
}
