"""Exception taxonomy shared by the generator, stores, delivery and HTTP layers."""


class WellnessError(Exception):
    """Base class for application errors."""


class GenerationError(WellnessError):
    """The AI generator is unreachable or returned unusable content."""


class StoreError(WellnessError):
    """A plan store read or write failed."""


class PlanValidationError(WellnessError, ValueError):
    """Malformed request input (bad date format, missing field)."""


class AuthError(WellnessError):
    """Missing or incorrect bearer credential."""


class ConfigurationError(WellnessError):
    """A required environment setting is missing."""


class EmailDeliveryError(WellnessError):
    """An email could not be delivered to one recipient."""

    def __init__(self, recipient: str, message: str):
        super().__init__(f"{recipient}: {message}")
        self.recipient = recipient
