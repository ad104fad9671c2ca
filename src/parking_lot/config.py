"""Configuration models and loading utilities."""

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .fees import DEFAULT_HOURLY_RATES, HourlyFeeCalculator
from .lot import ParkingLot
from .state.models import ParkingSpot, VehicleType


class FeeConfig(BaseModel):
    """Fee calculation configuration."""

    hourly_rates: dict[VehicleType, Decimal] = Field(
        default_factory=lambda: dict(DEFAULT_HOURLY_RATES)
    )
    grace_minutes: int = 15  # Stays this short are free
    daily_max: Optional[Decimal] = None  # Cap per 24 hours

    @field_validator("hourly_rates")
    @classmethod
    def fill_and_check_rates(cls, v: dict[VehicleType, Decimal]) -> dict[VehicleType, Decimal]:
        """Fall back to default rates for unlisted types and reject negative rates."""
        rates = {**DEFAULT_HOURLY_RATES, **v}
        for vehicle_type, rate in rates.items():
            if rate < 0:
                raise ValueError(f"Negative hourly rate for {vehicle_type.value}: {rate}")
        return rates

    @field_validator("grace_minutes")
    @classmethod
    def check_grace(cls, v: int) -> int:
        if v < 0:
            raise ValueError("grace_minutes must be non-negative")
        return v


class SpotConfig(BaseModel):
    """A parking spot to register at startup."""

    id: str
    floor: int = 0
    vehicle_type: VehicleType


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str) -> str:
        """Normalize to an upper-case level name known to the logging module."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level: {v}")
        return level


class AppConfig(BaseModel):
    """Main application configuration."""

    name: str = "Parking Lot"
    fees: FeeConfig = FeeConfig()
    spots: list[SpotConfig] = []
    logging: LoggingConfig = LoggingConfig()


def load_config(path: str | Path) -> AppConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return AppConfig(**(data or {}))


def get_config_path() -> Path:
    """Get the default configuration file path, relative to the working directory."""
    return Path("config/config.yaml")


def build_parking_lot(
    config: AppConfig,
    clock: Optional[Callable[[], datetime]] = None,
) -> ParkingLot:
    """
    Create a parking lot from configuration and register its spots.

    Args:
        config: Application configuration
        clock: Optional callable returning the current time

    Returns:
        ParkingLot with all configured spots available
    """
    calculator = HourlyFeeCalculator(
        rates=config.fees.hourly_rates,
        grace_minutes=config.fees.grace_minutes,
        daily_max=config.fees.daily_max,
    )
    lot = ParkingLot(fee_calculator=calculator, clock=clock or datetime.now)

    for spot in config.spots:
        lot.add_parking_spot(
            ParkingSpot(id=spot.id, floor=spot.floor, vehicle_type=spot.vehicle_type)
        )

    return lot
