"""Account domain exceptions.

Account-related exceptions for not found and conflict scenarios.
"""

from rental_api.core.exceptions import ConflictError, NotFoundError


class AccountNotFoundError(NotFoundError):
    """Raised when an account cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when attempting to register with an existing email."""

    error_type = "email_exists"

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message)


class EmergencyContactNotFoundError(NotFoundError):
    """Raised when an emergency contact index is out of range."""

    error_type = "emergency_contact_not_found"

    def __init__(self, message: str = "Emergency contact not found"):
        super().__init__(message)
