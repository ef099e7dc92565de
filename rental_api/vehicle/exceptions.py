"""Vehicle domain exceptions."""

from rental_api.core.exceptions import NotFoundError


class VehicleNotFoundError(NotFoundError):
    """Raised when a vehicle cannot be found."""

    error_type = "vehicle_not_found"

    def __init__(self, message: str = "Vehicle not found"):
        super().__init__(message)
