"""Shared fixtures."""

from datetime import datetime, timedelta

import pytest

from parking_lot import HourlyFeeCalculator, ParkingLot, Vehicle, VehicleType


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 8, 0, 0))


@pytest.fixture
def calculator():
    return HourlyFeeCalculator()


@pytest.fixture
def lot(clock, calculator):
    return ParkingLot(fee_calculator=calculator, clock=clock)


@pytest.fixture
def compact_car():
    return Vehicle(id="ve1", vehicle_type=VehicleType.COMPACT)
