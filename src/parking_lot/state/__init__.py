"""State models module."""

from .models import (
    LotState,
    ParkingSpot,
    ParkingTicket,
    SpotStatus,
    TicketStatus,
    Vehicle,
    VehicleType,
)

__all__ = [
    "LotState",
    "ParkingSpot",
    "ParkingTicket",
    "SpotStatus",
    "TicketStatus",
    "Vehicle",
    "VehicleType",
]
