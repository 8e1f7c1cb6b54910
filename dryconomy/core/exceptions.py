"""Custom exception hierarchy for the dryconomy simulator."""


class DryconomyError(Exception):
    """Base exception for all dryconomy errors."""
    pass


class InvalidInputError(DryconomyError):
    """
    Raised when simulation input or reference data fails validation.

    Attributes:
        field: Name of the offending input field.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class CityNotFoundError(InvalidInputError):
    """Raised when a city identifier does not resolve in the catalog."""

    def __init__(self, city_id):
        super().__init__("city_id", f"unknown city '{city_id}'")
        self.city_id = city_id


class ConfigurationError(DryconomyError):
    """Raised for configuration loading/validation errors."""
    pass


class LeadStoreError(DryconomyError):
    """Raised when a lead or simulation record cannot be persisted."""
    pass


class PersistenceError(DryconomyError):
    """Raised when a finished simulation could not be saved anywhere."""
    pass


class WebhookError(DryconomyError):
    """Raised for invalid webhook configuration."""
    pass
