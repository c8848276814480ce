"""Error kinds raised by the grocery and wastage services."""


class GMSError(Exception):
    """Base class for service-level errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GMSError):
    """Malformed input, e.g. a non-numeric quantity or price."""


class NotFoundError(GMSError):
    """Unknown grocery, shopping list, item or user."""


class PersistenceError(GMSError):
    """The underlying store failed to read or write."""


class DuplicateError(GMSError):
    """A uniqueness rule was violated (user email)."""
