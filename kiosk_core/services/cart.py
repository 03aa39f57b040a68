"""
Cart operations.

The cart is an ordered tuple of CartItem. Every operation returns a new tuple
and leaves the given one alone; line items themselves are frozen, so changing
a line means building a replacement with the same id.
"""

import logging
from typing import Optional, Tuple

from ..customization.cart_builder import build_cart_item
from ..schemas import CartItem

logger = logging.getLogger(__name__)

Cart = Tuple[CartItem, ...]


def find_item(cart: Cart, item_id: str) -> Optional[CartItem]:
    """Find a line item by id."""
    for item in cart:
        if item.id == item_id:
            return item
    return None


def item_count(cart: Cart) -> int:
    """Total number of items across all lines."""
    return sum(item.quantity for item in cart)


def add_item(cart: Cart, item: CartItem) -> Cart:
    """Append a line item."""
    return tuple(cart) + (item,)


def replace_item(cart: Cart, item: CartItem) -> Cart:
    """Swap in an edited line item, keeping its position. Unknown ids are appended."""
    if find_item(cart, item.id) is None:
        return add_item(cart, item)
    return tuple(item if existing.id == item.id else existing for existing in cart)


def remove_item(cart: Cart, item_id: str) -> Cart:
    """Remove a line item."""
    return tuple(item for item in cart if item.id != item_id)


def update_item_quantity(cart: Cart, item_id: str, quantity: int) -> Cart:
    """Change the quantity of a line; zero or less removes it."""
    if quantity <= 0:
        return remove_item(cart, item_id)
    return tuple(
        item.model_copy(update={"quantity": quantity}) if item.id == item_id else item
        for item in cart
    )


def remove_topping_from_item(cart: Cart, item_id: str, category_id: str, topping_id: str) -> Cart:
    """Take one topping off a line item from the cart screen."""
    item = find_item(cart, item_id)
    if item is None:
        logger.warning("Cart item %s not found", item_id)
        return tuple(cart)

    toppings = dict(item.selected_toppings)
    entries = tuple(e for e in toppings.get(category_id, ()) if e.topping_id != topping_id)
    if entries:
        toppings[category_id] = entries
    else:
        toppings.pop(category_id, None)

    updated = build_cart_item(
        item.menu_item,
        item.quantity,
        item.selected_options,
        toppings,
        item.special_instructions,
        item_id=item.id,
    )
    return replace_item(cart, updated)
