"""Exceptions raised by the parking lot."""


class ParkingLotError(Exception):
    """Base class for parking lot errors."""


class DuplicateSpotError(ParkingLotError):
    """A spot with the same id is already registered."""

    def __init__(self, spot_id: str):
        super().__init__(f"Spot '{spot_id}' is already registered")
        self.spot_id = spot_id


class SpotNotFoundError(ParkingLotError):
    """The spot is not registered in the lot."""

    def __init__(self, spot_id: str):
        super().__init__(f"Spot '{spot_id}' not found")
        self.spot_id = spot_id


class SpotOccupiedError(ParkingLotError):
    """The spot is occupied and cannot be removed."""

    def __init__(self, spot_id: str):
        super().__init__(f"Spot '{spot_id}' is occupied")
        self.spot_id = spot_id
