"""
Services Package for the Kiosk Core
===================================

Operations built on top of the customization engine:

- **cart.py**: Pure operations on the cart (add, replace, remove, quantities)
"""

from .cart import (
    Cart,
    find_item,
    item_count,
    add_item,
    replace_item,
    remove_item,
    update_item_quantity,
    remove_topping_from_item,
)

__all__ = [
    "Cart",
    "find_item",
    "item_count",
    "add_item",
    "replace_item",
    "remove_item",
    "update_item_quantity",
    "remove_topping_from_item",
]
