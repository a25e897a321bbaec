"""
Base exception classes for the pizza shop backend.
"""


class PizzaShopException(Exception):
    """
    Base exception for all pizza shop errors.

    All custom exceptions in the service should inherit from this class.
    This allows catching all service-specific exceptions with a single handler.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context (entity IDs, keys, etc.)
    """

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation with context."""
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class InvalidInputException(PizzaShopException):
    """Base exception for malformed or missing request data."""
    pass


class NotFoundException(PizzaShopException):
    """Base exception for lookups that matched nothing visible to the caller."""
    pass


class PersistenceException(PizzaShopException):
    """Base exception for storage faults (transaction, commit, integrity)."""
    pass
