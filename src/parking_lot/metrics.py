"""Prometheus metrics for the parking lot."""

from decimal import Decimal

from prometheus_client import Counter, Gauge, CollectorRegistry, generate_latest

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

TICKETS_ISSUED = Counter(
    "parking_tickets_issued_total",
    "Total number of parking tickets issued",
    ["vehicle_type"],
    registry=REGISTRY,
)

ALLOCATION_MISSES = Counter(
    "parking_allocation_misses_total",
    "Number of spot requests that found no available spot",
    ["vehicle_type"],
    registry=REGISTRY,
)

PAYMENTS = Counter(
    "parking_payments_total",
    "Total number of processed ticket payments",
    ["vehicle_type"],
    registry=REGISTRY,
)

FEES_COLLECTED = Counter(
    "parking_fees_collected_total",
    "Sum of fees collected on payment",
    ["vehicle_type"],
    registry=REGISTRY,
)

AVAILABLE_SPOTS = Gauge(
    "parking_spots_available",
    "Number of available parking spots",
    ["vehicle_type"],
    registry=REGISTRY,
)

OCCUPIED_SPOTS = Gauge(
    "parking_spots_occupied",
    "Number of occupied parking spots",
    ["vehicle_type"],
    registry=REGISTRY,
)


def record_ticket_issued(vehicle_type: str) -> None:
    """Record an issued ticket."""
    TICKETS_ISSUED.labels(vehicle_type=vehicle_type).inc()


def record_allocation_miss(vehicle_type: str) -> None:
    """Record a spot request that could not be served."""
    ALLOCATION_MISSES.labels(vehicle_type=vehicle_type).inc()


def record_payment(vehicle_type: str, fee: Decimal) -> None:
    """Record a processed payment and the collected fee."""
    PAYMENTS.labels(vehicle_type=vehicle_type).inc()
    FEES_COLLECTED.labels(vehicle_type=vehicle_type).inc(float(fee))


def update_spot_counts(vehicle_type: str, available: int, occupied: int) -> None:
    """Update spot count gauges for one vehicle type."""
    AVAILABLE_SPOTS.labels(vehicle_type=vehicle_type).set(available)
    OCCUPIED_SPOTS.labels(vehicle_type=vehicle_type).set(occupied)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest(REGISTRY)
