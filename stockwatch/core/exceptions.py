from typing import Optional


class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass


class ConfigurationError(BaseServiceError):
    """Raised when a collaborator the service needs was never configured."""
    hint: Optional[str] = None

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        if hint is not None:
            self.hint = hint


class StoreUnavailableError(ConfigurationError):
    """Raised when the data store is not configured or cannot be reached."""
    hint = "Set DATABASE_URL to point the service at the inventory database"


class NotifierNotConfiguredError(ConfigurationError):
    """Raised when the email transport has no credentials."""
    hint = "Set SMTP_HOST, SMTP_USERNAME and SMTP_PASSWORD"


class NotFoundError(BaseServiceError):
    """Base exception for lookups that found nothing."""
    pass


class TenantNotFoundError(NotFoundError):
    """Raised when a tenant does not exist."""
    pass


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found in its tenant."""
    pass


class DispatchError(BaseServiceError):
    """Raised when an alert email could not be delivered to one supplier."""

    def __init__(self, recipient: str, reason: str):
        super().__init__(f"Failed to send alert to {recipient}: {reason}")
        self.recipient = recipient
        self.reason = reason
