"""
Custom exceptions for the pizza shop backend.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
PizzaShopException (base)
├── InvalidInputException                 -> 400
│   ├── InvalidCartException
│   │   └── UnknownPizzaVariantException
│   ├── MissingClientIdException
│   ├── MissingOrderIdException
│   └── InvalidContactFormException
├── NotFoundException                     -> 404
│   ├── OrderNotFoundException
│   └── EmptyCatalogException
└── PersistenceException                  -> 500
    ├── OrderPersistenceException
    └── OrderIntegrityException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id=123)

The HTTP layer maps them to status codes and {"error": ...} bodies:
    status_code, message = handle_service_error(e)
"""

from .base import PizzaShopException, InvalidInputException, NotFoundException, PersistenceException
from .cart import InvalidCartException, UnknownPizzaVariantException
from .menu import EmptyCatalogException, InvalidContactFormException
from .order import (
    MissingClientIdException,
    MissingOrderIdException,
    OrderNotFoundException,
    OrderPersistenceException,
    OrderIntegrityException
)

__all__ = [
    # Base
    'PizzaShopException',
    'InvalidInputException',
    'NotFoundException',
    'PersistenceException',

    # Cart
    'InvalidCartException',
    'UnknownPizzaVariantException',

    # Menu
    'EmptyCatalogException',
    'InvalidContactFormException',

    # Order
    'MissingClientIdException',
    'MissingOrderIdException',
    'OrderNotFoundException',
    'OrderPersistenceException',
    'OrderIntegrityException',
]
