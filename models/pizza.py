# a pizza is one size of a pizza type and carries the unit price; the primary key
# is the composite variant key "{pizza_type_id}_{lowercased size}" that order
# line items reference
from pydantic import BaseModel
from sqlalchemy import Column, String, Numeric, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from models.base import Base, Money


class Pizza(Base):
    __tablename__ = 'pizzas'

    __table_args__ = (
        CheckConstraint('price >= 0', name='ck_pizza_price_not_negative'),
        UniqueConstraint('pizza_type_id', 'size', name='uq_pizza_type_size'),
    )

    pizza_id = Column(String(60), primary_key=True)
    pizza_type_id = Column(String(50), ForeignKey('pizza_types.pizza_type_id'), nullable=False)
    size = Column(String(10), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=True), nullable=False)

    # Relations
    pizza_type = relationship('PizzaType', back_populates='pizzas')


class PizzaVariantDTO(BaseModel):
    pizza_id: str
    pizza_type_id: str
    size: str
    price: Money


class PizzaMenuEntryDTO(BaseModel):
    """A pizza type as shown on the menu, with its price per size label."""
    id: str
    name: str
    category: str
    description: str
    image: str
    sizes: dict[str, Money]


def variant_key(pizza_type_id: str, size: str) -> str:
    return f"{pizza_type_id}_{size.lower()}"
