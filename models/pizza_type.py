from pydantic import BaseModel
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from models.base import Base


class PizzaType(Base):
    __tablename__ = 'pizza_types'

    pizza_type_id = Column(String(50), primary_key=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False)
    ingredients = Column(Text, nullable=False, default="")

    # Relations
    pizzas = relationship('Pizza', back_populates='pizza_type')


class PizzaTypeDTO(BaseModel):
    id: str
    name: str
    category: str
    description: str
