"""Fee calculation for parking tickets."""

import logging
import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Protocol

from .state.models import VehicleType

logger = logging.getLogger(__name__)

DEFAULT_HOURLY_RATES: dict[VehicleType, Decimal] = {
    VehicleType.COMPACT: Decimal("2.00"),
    VehicleType.LARGE: Decimal("4.00"),
    VehicleType.MOTORCYCLE: Decimal("1.00"),
}

DAY = timedelta(days=1)


class FeeCalculator(Protocol):
    """Maps a stay to a non-negative fee."""

    def calculate_fee(
        self,
        check_in: datetime,
        check_out: datetime,
        vehicle_type: VehicleType,
    ) -> Decimal: ...


class HourlyFeeCalculator:
    """
    Bills every started hour at a per-vehicle-type rate.

    Stays no longer than the grace period are free. With ``daily_max`` set,
    each full day and the remaining partial day are each capped at that amount.
    """

    def __init__(
        self,
        rates: Optional[dict[VehicleType, Decimal]] = None,
        grace_minutes: int = 15,
        daily_max: Optional[Decimal] = None,
    ):
        """
        Args:
            rates: Hourly rate per vehicle type (defaults to DEFAULT_HOURLY_RATES)
            grace_minutes: Free period at the start of a stay
            daily_max: Optional cap per 24 hours

        Raises:
            ValueError: If a vehicle type has no rate or a value is negative
        """
        self.rates = dict(DEFAULT_HOURLY_RATES if rates is None else rates)

        missing = [t.value for t in VehicleType if t not in self.rates]
        if missing:
            raise ValueError(f"No hourly rate for vehicle types: {', '.join(missing)}")
        if any(rate < 0 for rate in self.rates.values()):
            raise ValueError("Hourly rates must be non-negative")
        if grace_minutes < 0:
            raise ValueError("grace_minutes must be non-negative")
        if daily_max is not None and daily_max < 0:
            raise ValueError("daily_max must be non-negative")

        self.grace = timedelta(minutes=grace_minutes)
        self.daily_max = daily_max

    def calculate_fee(
        self,
        check_in: datetime,
        check_out: datetime,
        vehicle_type: VehicleType,
    ) -> Decimal:
        """
        Calculate the fee for a stay.

        Raises:
            ValueError: If check_out is before check_in
        """
        duration = check_out - check_in
        if duration < timedelta(0):
            raise ValueError(f"Check-out {check_out} is before check-in {check_in}")

        if duration <= self.grace:
            return Decimal("0.00")

        rate = self.rates[vehicle_type]

        if self.daily_max is None:
            fee = self._hourly(duration, rate)
        else:
            full_days, remainder = divmod(duration, DAY)
            fee = full_days * min(self._hourly(DAY, rate), self.daily_max)
            fee += min(self._hourly(remainder, rate), self.daily_max)

        logger.debug(f"Fee for {vehicle_type.value} over {duration}: {fee}")
        return fee

    @staticmethod
    def _hourly(duration: timedelta, rate: Decimal) -> Decimal:
        hours = math.ceil(duration / timedelta(hours=1))
        return rate * hours
