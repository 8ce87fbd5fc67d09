"""Custom exceptions for the marketplace dashboard core.

All error types live here to avoid circular imports between the
backend adapter, the workflow, and the view aggregators.
"""


class DeskError(Exception):
    """Base exception for all dashboard core errors."""


class ValidationError(DeskError):
    """Raised for locally detected bad input. Never reaches the backend."""


class InvalidSeriesError(ValidationError):
    """Raised when a price series is malformed or unusable (e.g. zero base price)."""


class InvalidCompanyError(ValidationError):
    """Raised when a company record lacks the fields an operation needs."""


class InvalidAmountError(ValidationError):
    """Raised when a purchase amount is not a positive number."""


class ConfigurationError(DeskError):
    """Raised when the admin payment configuration is missing or unreadable."""


class TransportError(DeskError):
    """Raised when a backend call fails (network, non-2xx, or unsuccessful envelope)."""


class AuthorizationError(DeskError):
    """Raised when the backend reports the session as unauthorized (HTTP 401)."""


class WorkflowStateError(DeskError):
    """Raised when a workflow operation is invoked from a state that forbids it."""
