"""
Cart-related exceptions.
"""

from .base import InvalidInputException


class InvalidCartException(InvalidInputException):
    """Raised when a submitted cart is absent, empty or has a malformed entry."""

    def __init__(self, reason: str, message: str = "Invalid order data", entry_index: int | None = None):
        details = {'reason': reason}
        if entry_index is not None:
            details['entry_index'] = entry_index
        super().__init__(message, details=details)
        self.reason = reason
        self.entry_index = entry_index


class UnknownPizzaVariantException(InvalidCartException):
    """Raised when a cart entry names a pizza/size pair that is not on the menu."""

    def __init__(self, pizza_ids: list[str]):
        super().__init__(
            reason='unknown_variant',
            message="Unknown pizza variant"
        )
        self.details['pizza_ids'] = pizza_ids
        self.pizza_ids = pizza_ids
