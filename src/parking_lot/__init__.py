"""Parking lot spot allocation and ticketing."""

from .errors import DuplicateSpotError, ParkingLotError, SpotNotFoundError, SpotOccupiedError
from .fees import FeeCalculator, HourlyFeeCalculator
from .lot import ParkingLot
from .state.models import ParkingSpot, ParkingTicket, SpotStatus, TicketStatus, Vehicle, VehicleType

__version__ = "1.0.0"

__all__ = [
    "DuplicateSpotError",
    "FeeCalculator",
    "HourlyFeeCalculator",
    "ParkingLot",
    "ParkingLotError",
    "ParkingSpot",
    "ParkingTicket",
    "SpotNotFoundError",
    "SpotOccupiedError",
    "SpotStatus",
    "TicketStatus",
    "Vehicle",
    "VehicleType",
]
