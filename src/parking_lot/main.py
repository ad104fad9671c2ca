"""Console demo entry point."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .config import AppConfig, LoggingConfig, build_parking_lot, get_config_path, load_config
from .lot import ParkingLot
from .metrics import get_metrics
from .state.models import ParkingSpot, ParkingTicket, Vehicle, VehicleType

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Spots registered when the configuration defines none
REFERENCE_SPOTS = [
    ParkingSpot(id="1", floor=1, vehicle_type=VehicleType.COMPACT),
    ParkingSpot(id="2", floor=0, vehicle_type=VehicleType.LARGE),
]
LATE_SPOT = ParkingSpot(id="3", floor=1, vehicle_type=VehicleType.COMPACT)


def print_unavailable_spots(lot: ParkingLot) -> None:
    """Print occupied spots grouped by vehicle type."""
    for line in lot.format_unavailable_spots():
        print(line)


def park(lot: ParkingLot, vehicle: Vehicle) -> Optional[ParkingTicket]:
    """Request a spot for a vehicle and issue a ticket for it."""
    spot = lot.get_parking_spot(vehicle)
    ticket = lot.issue_ticket(spot, vehicle)
    print_unavailable_spots(lot)
    return ticket


def run_demo(lot: ParkingLot) -> list[Optional[ParkingTicket]]:
    """
    Replay the reference scenario against a lot.

    Three compact vehicles arrive; a third compact spot is added after the
    second one is turned away. The first vehicle then pays and leaves.

    Returns:
        The tickets issued to each vehicle, None where none was issued
    """
    if not lot.spots:
        for spot in REFERENCE_SPOTS:
            lot.add_parking_spot(spot.model_copy())

    tickets = [
        park(lot, Vehicle(id="ve1", vehicle_type=VehicleType.COMPACT)),
        park(lot, Vehicle(id="ve2", vehicle_type=VehicleType.COMPACT)),
    ]

    if lot.get_spot(LATE_SPOT.id) is None:
        lot.add_parking_spot(LATE_SPOT.model_copy())
    else:
        logger.info(f"Spot '{LATE_SPOT.id}' already configured, not adding it again")

    tickets.append(park(lot, Vehicle(id="ve3", vehicle_type=VehicleType.COMPACT)))

    first = tickets[0]
    if first is not None:
        fee = lot.process_payment(first)
        print(f"{first.vehicle.id} paid {fee} for spot {first.spot.id}")
        print_unavailable_spots(lot)

    return tickets


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parking lot demo")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level, overrides the configuration",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the demo."""
    args = parse_args(argv)

    config_path = args.config or get_config_path()
    try:
        if config_path.exists() or args.config is not None:
            config = load_config(config_path)
        else:
            config = AppConfig()
        if args.log_level is not None:
            config.logging = LoggingConfig(level=args.log_level)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Failed to load configuration: {e}")
        return 1

    logging.basicConfig(level=config.logging.level, format=LOG_FORMAT)
    logger.info(f"Starting {config.name}")

    lot = build_parking_lot(config)
    run_demo(lot)
    logger.debug(f"Metrics:\n{get_metrics().decode()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
