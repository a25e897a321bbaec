from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base import Base, Money
from models.order import PricedOrderDTO


class OrderDetail(Base):
    __tablename__ = 'order_details'

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_order_detail_positive_quantity'),
        Index('ix_order_details_order_id', 'order_id'),
        # Cart lines are merged before insert, so a variant appears once per order
        Index('ix_order_details_unique', 'order_id', 'pizza_id', unique=True),
    )

    order_details_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('orders.order_id', ondelete='CASCADE'), nullable=False)
    # Composite variant key; resolved against pizzas.pizza_id when the order is priced
    pizza_id = Column(String(60), nullable=False)
    quantity = Column(Integer, nullable=False)

    # Relations
    order = relationship('Order', back_populates='order_details')


class OrderDetailDTO(BaseModel):
    order_details_id: int | None = None
    order_id: int | None = None
    pizza_id: str | None = None
    quantity: int | None = None


class PricedOrderItemDTO(BaseModel):
    """One line item joined with the catalog and priced at read time."""
    model_config = ConfigDict(populate_by_name=True)

    pizza_type_id: str = Field(serialization_alias="pizzaTypeId")
    name: str
    category: str
    description: str
    quantity: int
    price: Money
    total: Money
    size: str
    image: str


class OrderViewDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order: PricedOrderDTO
    order_items: list[PricedOrderItemDTO] = Field(serialization_alias="orderItems")
