"""Data models for vehicles, parking spots and tickets."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class VehicleType(str, Enum):
    """Class of vehicle, used to match vehicles with spots."""

    COMPACT = "COMPACT"
    LARGE = "LARGE"
    MOTORCYCLE = "MOTORCYCLE"


class SpotStatus(str, Enum):
    """Status of a parking spot."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"


class TicketStatus(str, Enum):
    """Payment status of a parking ticket."""

    UNPAID = "unpaid"
    PAID = "paid"


class Vehicle(BaseModel):
    """A vehicle identified by its id and class."""

    model_config = ConfigDict(frozen=True)

    id: str
    vehicle_type: VehicleType


class ParkingSpot(BaseModel):
    """
    A physical parking spot.

    Occupancy is derived from ``status``; only the owning lot changes it.
    """

    id: str = Field(frozen=True)
    floor: int = Field(frozen=True)
    vehicle_type: VehicleType = Field(frozen=True)
    status: SpotStatus = SpotStatus.AVAILABLE

    @property
    def occupied(self) -> bool:
        return self.status == SpotStatus.OCCUPIED

    def occupy(self) -> None:
        self.status = SpotStatus.OCCUPIED

    def free(self) -> None:
        self.status = SpotStatus.AVAILABLE


class ParkingTicket(BaseModel):
    """
    Ticket issued when a vehicle is assigned a spot.

    While unpaid, the fee is recomputed on every call to ``get_fee``.
    Once paid, check-out time and fee are frozen.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    vehicle: Vehicle
    spot: ParkingSpot
    check_in: datetime
    check_out: Optional[datetime] = None
    fee: Optional[Decimal] = None
    status: TicketStatus = TicketStatus.UNPAID

    @property
    def is_paid(self) -> bool:
        return self.status == TicketStatus.PAID

    def get_fee(self, check_out: datetime, calculator) -> Decimal:
        """
        Compute the fee for leaving at ``check_out``.

        Args:
            check_out: Time the vehicle leaves
            calculator: Object with a ``calculate_fee(check_in, check_out, vehicle_type)`` method

        Returns:
            The stored fee if the ticket is paid, otherwise the fresh fee
        """
        if self.is_paid:
            return self.fee

        self.check_out = check_out
        self.fee = calculator.calculate_fee(
            self.check_in, check_out, self.vehicle.vehicle_type
        )
        return self.fee

    def mark_paid(self) -> None:
        self.status = TicketStatus.PAID


class VehicleTypeSummary(BaseModel):
    """Spot counts for one vehicle type."""

    vehicle_type: VehicleType
    total: int
    available: int
    occupied: int


class LotState(BaseModel):
    """Overall lot state."""

    spots: list[ParkingSpot]
    by_type: list[VehicleTypeSummary]
    active_tickets: int
    generated_at: datetime
