"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ProfileValidationError(DomainException, ValueError):
    """User profile is missing a field or carries an out-of-range value"""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class VehicleNotFoundError(DomainException):
    """Requested vehicle id or model name is not in the catalog"""

    def __init__(self, vehicle_id: str):
        super().__init__(f"Vehicle not found: {vehicle_id}")
        self.vehicle_id = vehicle_id


class UpstreamUnavailableError(DomainException):
    """An external collaborator (catalog source, narration model) failed"""

    pass


class CatalogFetchError(UpstreamUnavailableError):
    """Remote vehicle data could not be fetched or parsed"""

    pass


class NarrationError(UpstreamUnavailableError):
    """Narration model call failed or returned nothing usable"""

    pass
