"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised before any I/O when input is malformed: empty comment text or an
    identifier that is not a canonical UUID.
    """

    pass


class StoreError(DomainError):
    """Raised when a store operation fails after all retry attempts."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")
