"""
Error Handler Utility for the HTTP layer

Maps service exceptions to an HTTP status code and the short message sent
back as {"error": message}.

Usage in the app:
    try:
        result = await order_service.get_order(order_id, client_id)
    except PizzaShopException as e:
        status_code, message = handle_service_error(e)
"""

import logging

from exceptions import (
    PizzaShopException,
    InvalidInputException,
    NotFoundException,
    PersistenceException,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


def handle_service_error(exception: PizzaShopException) -> tuple[int, str]:
    """
    Convert service exception to (status_code, client-facing message).

    Storage faults keep their generic message ("Failed to create order");
    internal detail such as the failing pizza id stays in the server log.

    Returns:
        Tuple of HTTP status code and error message
    """
    if isinstance(exception, InvalidInputException):
        logger.info(f"Rejected request: {type(exception).__name__} - {exception!r}")
        return 400, exception.message

    if isinstance(exception, NotFoundException):
        logger.info(f"Not found: {type(exception).__name__} - {exception!r}")
        return 404, exception.message

    if isinstance(exception, PersistenceException):
        logger.error(f"Storage error: {exception!r}", exc_info=exception)
        if exception.details.get('reason'):
            return 500, exception.message
        return 500, GENERIC_ERROR_MESSAGE

    logger.error(f"Unmapped service error: {exception!r}", exc_info=exception)
    return 500, GENERIC_ERROR_MESSAGE
