"""
Menu and contact form exceptions.
"""

from .base import InvalidInputException, NotFoundException


class EmptyCatalogException(NotFoundException):
    """Raised when the menu has no pizza types to choose from."""

    def __init__(self):
        super().__init__("No pizzas available")


class InvalidContactFormException(InvalidInputException):
    """Raised when a contact form submission misses a required field."""

    def __init__(self, missing_fields: list[str]):
        super().__init__(
            "All fields are required",
            details={'missing_fields': missing_fields}
        )
        self.missing_fields = missing_fields
