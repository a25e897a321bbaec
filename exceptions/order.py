"""
Order-related exceptions.
"""

from .base import InvalidInputException, NotFoundException, PersistenceException


class MissingClientIdException(InvalidInputException):
    """Raised when a read requires the X-User-ID header and it is absent."""

    def __init__(self):
        super().__init__("User ID required")


class MissingOrderIdException(InvalidInputException):
    """Raised when an order lookup is made without an order identifier."""

    def __init__(self):
        super().__init__("Order ID required")


class OrderNotFoundException(NotFoundException):
    """
    Raised when no order matches the (order_id, client_id) pair.

    Covers both "does not exist" and "belongs to another client" so that
    callers learn nothing about other clients' orders.
    """

    def __init__(self, order_id):
        super().__init__(
            "Order not found or unauthorized",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class OrderPersistenceException(PersistenceException):
    """Raised when reading or writing orders fails in storage; writes are rolled back."""

    def __init__(self, reason: str, message: str = "Failed to create order"):
        super().__init__(
            message,
            details={'reason': reason}
        )
        self.reason = reason


class OrderIntegrityException(PersistenceException):
    """Raised when an order line item references a pizza variant that no longer exists."""

    def __init__(self, order_id: int, pizza_id: str):
        super().__init__(
            f"Order {order_id} references unknown pizza variant {pizza_id}",
            details={'order_id': order_id, 'pizza_id': pizza_id}
        )
        self.order_id = order_id
        self.pizza_id = pizza_id
