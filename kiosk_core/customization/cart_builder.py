"""
Cart line item construction.

Packages a customized menu item into an immutable CartItem. No prices are
computed here; totals are summed by the order submission side from the
fields the line item carries.
"""

import logging
import uuid
from typing import Mapping, Optional, Sequence

from .. import config
from ..schemas import CartItem, MenuItemWithOptions, SelectedOption

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when a cart line item cannot be built from the given input."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


def new_cart_item_id() -> str:
    """Generate a short id for a line item, unique within a session."""
    return str(uuid.uuid4())[:8]


def build_cart_item(
    menu_item: MenuItemWithOptions,
    quantity: int,
    selected_options: Sequence[SelectedOption],
    selected_toppings: Mapping[str, Sequence],
    special_instructions: Optional[str] = None,
    item_id: Optional[str] = None,
) -> CartItem:
    """
    Build a cart line item.

    Args:
        menu_item: The menu item the selections were made on
        quantity: Number of items on the line, at least 1
        selected_options: Option selections from the customization screen
        selected_toppings: Topping selections from the customization screen
        special_instructions: Free text for the kitchen; blank means none
        item_id: Keep this id when replacing an edited line item

    Raises:
        ValidationError: If quantity is below 1 or the instructions are too long
    """
    if quantity < 1:
        raise ValidationError("quantity", f"quantity must be at least 1, got {quantity}")

    instructions = (special_instructions or "").strip() or None
    if instructions and len(instructions) > config.MAX_SPECIAL_INSTRUCTIONS_LENGTH:
        raise ValidationError(
            "special_instructions",
            f"special instructions exceed {config.MAX_SPECIAL_INSTRUCTIONS_LENGTH} characters",
        )

    cart_item = CartItem(
        id=item_id or new_cart_item_id(),
        menu_item=menu_item,
        quantity=quantity,
        selected_options=tuple(selected_options),
        selected_toppings={
            category_id: tuple(entries)
            for category_id, entries in selected_toppings.items()
            if entries
        },
        special_instructions=instructions,
    )
    logger.debug("Built cart item %s for %s x%d", cart_item.id, menu_item.id, quantity)
    return cart_item
