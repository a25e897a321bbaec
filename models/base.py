from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Prices are kept as Decimal end to end and only become JSON numbers on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
