"""
Schemas Package for the Kiosk Core
==================================

Data models shared by the customization engine and its hosting views.

Schema Organization:
--------------------
- **menu.py**: Menu item descriptors (option groups, topping categories,
  toppings) and the derived `CategoryKind`
- **cart.py**: Selection value objects and the immutable `CartItem`
"""

from .menu import (
    DEFAULT_DISPLAY_ORDER,
    CategoryKind,
    derive_category_kind,
    Topping,
    ToppingCategory,
    OptionChoice,
    OptionGroup,
    MenuItemWithOptions,
)
from .cart import (
    ToppingSelection,
    SelectedOption,
    SelectedToppings,
    SelectedOptions,
    selections_for,
    find_selection,
    total_quantity,
    CartItem,
)

__all__ = [
    # Menu
    "DEFAULT_DISPLAY_ORDER",
    "CategoryKind",
    "derive_category_kind",
    "Topping",
    "ToppingCategory",
    "OptionChoice",
    "OptionGroup",
    "MenuItemWithOptions",
    # Cart
    "ToppingSelection",
    "SelectedOption",
    "SelectedToppings",
    "SelectedOptions",
    "selections_for",
    "find_selection",
    "total_quantity",
    "CartItem",
]
