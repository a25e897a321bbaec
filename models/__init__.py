"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for relationships to work correctly.
"""

from models.base import Base
from models.pizza_type import PizzaType
from models.pizza import Pizza
from models.order import Order
from models.order_detail import OrderDetail
