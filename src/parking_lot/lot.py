"""Parking lot spot inventory and ticketing."""

import logging
import threading
from collections import deque
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

from .errors import DuplicateSpotError, SpotNotFoundError, SpotOccupiedError
from .fees import FeeCalculator, HourlyFeeCalculator
from .metrics import (
    record_allocation_miss,
    record_payment,
    record_ticket_issued,
    update_spot_counts,
)
from .state.models import (
    LotState,
    ParkingSpot,
    ParkingTicket,
    SpotStatus,
    Vehicle,
    VehicleType,
    VehicleTypeSummary,
)

logger = logging.getLogger(__name__)


class ParkingLot:
    """
    Owns the spot inventory and issues tickets.

    Spots are indexed by id. For each vehicle type, the ids of available
    spots are kept in a FIFO queue: a spot is allocated in the order it was
    registered or returned. A registered spot is in its type's queue if and
    only if its status is AVAILABLE.
    """

    def __init__(
        self,
        fee_calculator: Optional[FeeCalculator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize an empty parking lot.

        Args:
            fee_calculator: Fee calculator (defaults to HourlyFeeCalculator)
            clock: Callable returning the current time
        """
        self.fee_calculator = fee_calculator or HourlyFeeCalculator()
        self.clock = clock

        self.spots: dict[str, ParkingSpot] = {}
        self._available: dict[VehicleType, deque[str]] = {
            vehicle_type: deque() for vehicle_type in VehicleType
        }
        self._active_tickets: dict[str, ParkingTicket] = {}  # spot_id -> ticket
        self._lock = threading.Lock()

    def add_parking_spot(self, spot: ParkingSpot) -> None:
        """
        Register a spot and make it available for allocation.

        Raises:
            DuplicateSpotError: If a spot with the same id is registered
        """
        with self._lock:
            if spot.id in self.spots:
                raise DuplicateSpotError(spot.id)

            spot.free()
            self.spots[spot.id] = spot
            self._available[spot.vehicle_type].append(spot.id)
            self._update_counts(spot.vehicle_type)

        logger.info(
            f"Added spot '{spot.id}' ({spot.vehicle_type.value}, floor {spot.floor})"
        )

    def remove_parking_spot(self, spot: Union[ParkingSpot, str]) -> ParkingSpot:
        """
        Remove an available spot from the lot.

        Args:
            spot: The spot or its id

        Returns:
            The removed spot

        Raises:
            SpotNotFoundError: If the spot is not registered
            SpotOccupiedError: If the spot is currently occupied
        """
        spot_id = spot if isinstance(spot, str) else spot.id

        with self._lock:
            registered = self.spots.get(spot_id)
            if registered is None or (not isinstance(spot, str) and registered is not spot):
                raise SpotNotFoundError(spot_id)
            if registered.occupied:
                raise SpotOccupiedError(spot_id)

            del self.spots[spot_id]
            self._available[registered.vehicle_type].remove(spot_id)
            self._update_counts(registered.vehicle_type)

        logger.info(f"Removed spot '{spot_id}'")
        return registered

    def get_parking_spot(self, vehicle: Vehicle) -> Optional[ParkingSpot]:
        """
        Allocate the first available spot for the vehicle's type.

        Returns:
            The allocated spot, or None if no spot of that type is available
        """
        vehicle_type = vehicle.vehicle_type

        with self._lock:
            queue = self._available[vehicle_type]
            if not queue:
                record_allocation_miss(vehicle_type.value)
                logger.debug(f"No {vehicle_type.value} spot available for {vehicle.id}")
                return None

            spot = self.spots[queue.popleft()]
            spot.occupy()
            self._update_counts(vehicle_type)

        logger.debug(f"Allocated spot '{spot.id}' to {vehicle.id}")
        return spot

    def issue_ticket(
        self, spot: Optional[ParkingSpot], vehicle: Vehicle
    ) -> Optional[ParkingTicket]:
        """
        Issue a ticket for a vehicle parked in a spot.

        Args:
            spot: Spot returned by get_parking_spot, possibly None
            vehicle: The parking vehicle

        Returns:
            The new ticket, or None if no spot was given

        Raises:
            SpotNotFoundError: If the spot is not the one registered under its id
            SpotOccupiedError: If the spot already has an active ticket
        """
        if spot is None:
            logger.info(f"No Space Available for {vehicle.id}")
            return None

        with self._lock:
            if self.spots.get(spot.id) is not spot:
                raise SpotNotFoundError(spot.id)
            if spot.id in self._active_tickets:
                raise SpotOccupiedError(spot.id)

            if not spot.occupied:
                # Spot handed in directly rather than through get_parking_spot
                self._available[spot.vehicle_type].remove(spot.id)
                spot.occupy()
                self._update_counts(spot.vehicle_type)

            ticket = ParkingTicket(vehicle=vehicle, spot=spot, check_in=self.clock())
            self._active_tickets[spot.id] = ticket

        record_ticket_issued(vehicle.vehicle_type.value)
        logger.info(f"Ticket issued to {vehicle.id}")
        return ticket

    def calculate_fee(self, ticket: ParkingTicket) -> Decimal:
        """
        Calculate the fee owed for a ticket as of now.

        Stores the check-out time and fee on an unpaid ticket. A paid ticket
        keeps the fee it was paid with.
        """
        return ticket.get_fee(self.clock(), self.fee_calculator)

    def process_payment(self, ticket: ParkingTicket) -> Decimal:
        """
        Settle a ticket and return its spot to the available pool.

        Paying an already paid ticket changes nothing.

        Returns:
            The fee paid
        """
        spot = ticket.spot

        with self._lock:
            if ticket.is_paid:
                logger.warning(f"Ticket {ticket.id} for {ticket.vehicle.id} is already paid")
                return ticket.fee

            fee = ticket.get_fee(self.clock(), self.fee_calculator)
            ticket.mark_paid()
            if self._active_tickets.get(spot.id) is ticket:
                del self._active_tickets[spot.id]
                spot.free()
                self._available[spot.vehicle_type].append(spot.id)
                self._update_counts(spot.vehicle_type)
            else:
                logger.warning(f"Ticket {ticket.id} does not hold spot '{spot.id}'; not returned")

        record_payment(ticket.vehicle.vehicle_type.value, fee)
        logger.info(f"Payment of {fee} processed for {ticket.vehicle.id}, spot '{spot.id}' freed")
        return fee

    @property
    def active_tickets(self) -> list[ParkingTicket]:
        """Tickets issued and not yet paid."""
        return list(self._active_tickets.values())

    def get_spot(self, spot_id: str) -> Optional[ParkingSpot]:
        """Get a registered spot by id."""
        return self.spots.get(spot_id)

    def get_available_count(self, vehicle_type: Optional[VehicleType] = None) -> int:
        """Get count of available spots, optionally for one vehicle type."""
        return sum(
            1
            for s in self.spots.values()
            if s.status == SpotStatus.AVAILABLE
            and (vehicle_type is None or s.vehicle_type == vehicle_type)
        )

    def get_occupied_count(self, vehicle_type: Optional[VehicleType] = None) -> int:
        """Get count of occupied spots, optionally for one vehicle type."""
        return sum(
            1
            for s in self.spots.values()
            if s.status == SpotStatus.OCCUPIED
            and (vehicle_type is None or s.vehicle_type == vehicle_type)
        )

    def get_unavailable_spots(self) -> dict[VehicleType, list[ParkingSpot]]:
        """Occupied spots grouped by vehicle type, omitting types with none."""
        unavailable: dict[VehicleType, list[ParkingSpot]] = {}
        for spot in self.spots.values():
            if spot.occupied:
                unavailable.setdefault(spot.vehicle_type, []).append(spot)
        return unavailable

    def format_unavailable_spots(self) -> list[str]:
        """Render the occupied-spot listing as console lines."""
        lines = []
        for vehicle_type, spots in self.get_unavailable_spots().items():
            lines.append(f"Vehicle Type: {vehicle_type.value}")
            lines.extend(f"=====>Parking Spot: {spot.id}" for spot in spots)
        return lines

    def get_state(self) -> LotState:
        """Get current lot state."""
        by_type = [
            VehicleTypeSummary(
                vehicle_type=vehicle_type,
                total=self.get_available_count(vehicle_type)
                + self.get_occupied_count(vehicle_type),
                available=self.get_available_count(vehicle_type),
                occupied=self.get_occupied_count(vehicle_type),
            )
            for vehicle_type in VehicleType
        ]

        return LotState(
            spots=list(self.spots.values()),
            by_type=by_type,
            active_tickets=len(self._active_tickets),
            generated_at=self.clock(),
        )

    def _update_counts(self, vehicle_type: VehicleType) -> None:
        update_spot_counts(
            vehicle_type=vehicle_type.value,
            available=len(self._available[vehicle_type]),
            occupied=self.get_occupied_count(vehicle_type),
        )
