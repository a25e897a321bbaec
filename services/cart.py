import logging
from collections.abc import Mapping
from typing import Any

from exceptions.cart import InvalidCartException
from models.cart import MergedCartItemDTO
from models.pizza import variant_key

logger = logging.getLogger(__name__)


class CartService:

    @staticmethod
    def validate_cart(cart: Any) -> list:
        """
        Check the cart's outer shape.

        Raises:
            InvalidCartException: cart is absent, not a list, or empty
        """
        if cart is None:
            raise InvalidCartException(reason='missing_cart')
        if not isinstance(cart, (list, tuple)):
            raise InvalidCartException(reason='cart_not_a_list')
        if len(cart) == 0:
            raise InvalidCartException(reason='empty_cart')
        return list(cart)

    @staticmethod
    def parse_entry(entry: Any, index: int) -> tuple[str, str]:
        """
        Extract (pizza_type_id, size) from one cart entry {"pizza": {"id": ...}, "size": ...}.

        Raises:
            InvalidCartException: entry has no usable pizza id or size
        """
        if not isinstance(entry, Mapping):
            raise InvalidCartException(reason='entry_not_an_object', message="Invalid item data", entry_index=index)

        pizza = entry.get("pizza")
        pizza_type_id = pizza.get("id") if isinstance(pizza, Mapping) else None
        # bool is an int subclass but never a pizza id
        if isinstance(pizza_type_id, bool) or not isinstance(pizza_type_id, (str, int)) or pizza_type_id == "":
            raise InvalidCartException(reason='missing_pizza_id', message="Invalid item data", entry_index=index)

        size = entry.get("size")
        if not isinstance(size, str) or not size.strip():
            raise InvalidCartException(reason='missing_size', message="Invalid item data", entry_index=index)

        return str(pizza_type_id), size.lower()

    @staticmethod
    def merge_cart(cart: Any) -> dict[str, MergedCartItemDTO]:
        """
        Merge duplicate cart entries into line items.

        Entries are keyed by "{pizza_type_id}_{lowercased size}"; the first
        occurrence starts at quantity 1 and each repeat adds one. Sizes compare
        case-insensitively, so "M" and "m" end up on the same line.

        Args:
            cart: Raw cart from the request body

        Returns:
            dict mapping composite variant key -> MergedCartItemDTO

        Raises:
            InvalidCartException: cart or one of its entries is malformed
        """
        entries = CartService.validate_cart(cart)
        merged: dict[str, MergedCartItemDTO] = {}
        for index, entry in enumerate(entries):
            pizza_type_id, size = CartService.parse_entry(entry, index)
            pizza_id = variant_key(pizza_type_id, size)
            if pizza_id in merged:
                merged[pizza_id].quantity += 1
            else:
                merged[pizza_id] = MergedCartItemDTO(
                    pizza_id=pizza_id,
                    pizza_type_id=pizza_type_id,
                    size=size,
                    quantity=1
                )
        logger.debug(f"Merged {len(entries)} cart entries into {len(merged)} line item(s)")
        return merged
