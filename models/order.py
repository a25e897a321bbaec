from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Column, Integer, String, Index
from sqlalchemy.orm import relationship

from models.base import Base, Money


class Order(Base):
    __tablename__ = 'orders'

    __table_args__ = (
        Index('ix_orders_user_id', 'user_id'),
        Index('ix_orders_date', 'date'),
    )

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False)
    # ISO calendar date (YYYY-MM-DD); string comparison orders chronologically
    date = Column(String(10), nullable=False)
    # 24-hour local clock (HH:MM:SS)
    time = Column(String(8), nullable=False)

    # Relations
    order_details = relationship(
        'OrderDetail',
        back_populates='order',
        cascade='all, delete-orphan',
        passive_deletes=True
    )


class OrderDTO(BaseModel):
    order_id: int | None = None
    user_id: str | None = None
    date: str | None = None
    time: str | None = None


class OrderSummaryDTO(BaseModel):
    """Order header as listed in a client's order history."""
    order_id: int
    date: str
    time: str


class PricedOrderDTO(OrderSummaryDTO):
    total: Money


class CreatedOrderDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: int = Field(serialization_alias="orderId")
    user_id: str = Field(serialization_alias="userId")
