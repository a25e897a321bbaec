# a cart only exists in the request body: an ordered list of entries, one per
# pizza the client picked. Identical (pizza type, size) entries are merged into
# a single line item with a quantity before the order is stored
from pydantic import BaseModel


class MergedCartItemDTO(BaseModel):
    pizza_id: str
    pizza_type_id: str
    size: str
    quantity: int = 1
