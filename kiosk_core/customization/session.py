"""
Customization and order sessions.

These are the objects a hosting view keeps alive while a customer uses the
kiosk. They hold state and route every action through the pure functions of
the engine; they contain no selection rules of their own.

- CustomizationSession: one menu item on the customization screen
- OrderSession: the whole visit, from the welcome screen to the confirmation
"""

import logging
from typing import List, Optional, Tuple

from .. import config
from ..config import SessionConfig
from ..schemas import (
    CartItem,
    MenuItemWithOptions,
    SelectedOptions,
    SelectedToppings,
    ToppingCategory,
)
from ..services import cart as cart_ops
from .cart_builder import build_cart_item
from .flow import InvalidTransitionError, OrderFlow, OrderStep, OrderType
from .initializer import initialize_options, initialize_toppings
from .options import toggle_choice
from .toppings import toggle_topping
from .validation import SelectionIssue, find_selection_issues
from .visibility import prune_hidden_selections, visible_topping_categories

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    """Raised when an order is confirmed without any items."""


class CustomizationSession:
    """
    Selection state for the item on the customization screen.

    When a cart item is being edited, `editing_item_id` holds its id so the
    built line item replaces it in the cart.
    """

    def __init__(self, menu_item: MenuItemWithOptions):
        self.menu_item = menu_item
        self.editing_item_id: Optional[str] = None
        self._reset_selections()

    def _reset_selections(self) -> None:
        self.selected_toppings: SelectedToppings = initialize_toppings(self.menu_item)
        self.selected_options: SelectedOptions = initialize_options(self.menu_item)
        self.quantity = 1
        self.special_instructions = ""

    @classmethod
    def from_cart_item(cls, item: CartItem) -> "CustomizationSession":
        """Re-open a cart line item for editing."""
        session = cls(item.menu_item)
        session.editing_item_id = item.id
        session.selected_toppings = dict(item.selected_toppings)
        session.selected_options = tuple(item.selected_options)
        session.quantity = item.quantity
        session.special_instructions = item.special_instructions or ""
        return session

    def open_item(self, menu_item: MenuItemWithOptions) -> None:
        """
        Show a menu item. A different item id starts over with fresh
        selections; the same id keeps the current ones.
        """
        if menu_item.id == self.menu_item.id:
            self.menu_item = menu_item
            return
        logger.debug("Customization switched from %s to %s", self.menu_item.id, menu_item.id)
        self.menu_item = menu_item
        self.editing_item_id = None
        self._reset_selections()

    def toggle_topping(self, category_id: str, topping_id: str, quantity: Optional[int] = None) -> SelectedToppings:
        category = self.menu_item.get_topping_category(category_id)
        if category is None:
            logger.warning("Unknown topping category %s on %s", category_id, self.menu_item.id)
        elif category.get_topping(topping_id) is None:
            logger.warning("Unknown topping %s in category %s", topping_id, category_id)
        self.selected_toppings = toggle_topping(
            self.selected_toppings, category_id, topping_id, quantity, category
        )
        return self.selected_toppings

    def toggle_choice(self, option_id: str, choice_id: str) -> SelectedOptions:
        group = self.menu_item.get_option(option_id)
        if group is None:
            logger.warning("Unknown option group %s on %s", option_id, self.menu_item.id)
        elif group.get_choice(choice_id) is None:
            logger.warning("Unknown choice %s in option group %s", choice_id, option_id)
        self.selected_options = toggle_choice(self.selected_options, option_id, choice_id, group)
        return self.selected_options

    def set_quantity(self, quantity: int) -> int:
        """Set the line quantity, kept within 1..MAX_LINE_ITEM_QUANTITY."""
        self.quantity = min(max(1, quantity), config.MAX_LINE_ITEM_QUANTITY)
        return self.quantity

    def set_special_instructions(self, text: str) -> None:
        self.special_instructions = text or ""

    @property
    def visible_categories(self) -> List[ToppingCategory]:
        return visible_topping_categories(
            self.menu_item, prune_hidden_selections(self.menu_item, self.selected_toppings)
        )

    @property
    def issues(self) -> List[SelectionIssue]:
        return find_selection_issues(self.menu_item, self.selected_options, self.selected_toppings)

    def is_valid(self) -> bool:
        return not self.issues

    def build_cart_item(self) -> CartItem:
        """Package the current selections; hidden categories are left out."""
        return build_cart_item(
            self.menu_item,
            self.quantity,
            self.selected_options,
            prune_hidden_selections(self.menu_item, self.selected_toppings),
            self.special_instructions,
            item_id=self.editing_item_id,
        )


class OrderSession:
    """
    One customer's visit to the kiosk.

    Ties the step flow, the cart and the active customization together. The
    hosting view calls one method per user action and re-renders from the
    attributes afterwards.
    """

    def __init__(self, session_config: Optional[SessionConfig] = None):
        self.config = session_config or SessionConfig.from_env()
        self.flow = OrderFlow()
        self.cart: Tuple[CartItem, ...] = ()
        self.table_number: Optional[str] = None
        self.customization: Optional[CustomizationSession] = None

    @property
    def step(self) -> OrderStep:
        return self.flow.step

    @property
    def order_type(self) -> Optional[OrderType]:
        return self.flow.order_type

    def start(self) -> None:
        """Leave the welcome screen."""
        self.flow.move_to(OrderStep.ORDER_TYPE)

    def choose_order_type(self, order_type: OrderType, table_number: Optional[str] = None) -> None:
        """Pick takeaway or dine-in and continue to the menu."""
        self.flow.choose_order_type(order_type)
        if table_number:
            self.table_number = table_number
        self.flow.move_to(OrderStep.MENU)
        logger.info(
            "Order started at restaurant %s (%s, language %s)",
            self.config.restaurant_id, self.flow.order_type.value, self.config.language_code,
        )

    def open_item(self, menu_item: MenuItemWithOptions) -> CustomizationSession:
        """
        Open the customization screen for a menu item from the menu.

        Raises:
            InvalidTransitionError: If the menu is not the current screen;
                from the cart only existing lines can be re-opened
        """
        if self.step != OrderStep.MENU:
            raise InvalidTransitionError(
                self.step, OrderStep.CUSTOMIZE_ITEM, "new items are opened from the menu"
            )
        self.flow.move_to(OrderStep.CUSTOMIZE_ITEM)
        self.customization = CustomizationSession(menu_item)
        return self.customization

    def edit_cart_item(self, item_id: str) -> CustomizationSession:
        """Open an existing line item from the cart for editing."""
        item = cart_ops.find_item(self.cart, item_id)
        if item is None:
            raise KeyError(f"Cart item {item_id} not found")
        self.flow.move_to(OrderStep.CUSTOMIZE_ITEM)
        self.customization = CustomizationSession.from_cart_item(item)
        return self.customization

    def add_to_cart(self) -> CartItem:
        """
        Finish the active customization and put it in the cart.

        Raises:
            ValidationError: If the line item cannot be built
        """
        if self.customization is None:
            raise RuntimeError("No item is being customized")
        item = self.customization.build_cart_item()
        if self.customization.editing_item_id:
            self.cart = cart_ops.replace_item(self.cart, item)
        else:
            self.cart = cart_ops.add_item(self.cart, item)
        self.flow.move_to(OrderStep.CART)
        self.customization = None
        logger.info("Added %s x%d to cart (%d lines)", item.menu_item.id, item.quantity, len(self.cart))
        return item

    def view_cart(self) -> None:
        self.flow.move_to(OrderStep.CART)

    def back_to_menu(self) -> None:
        """Return from the cart to add another item."""
        self.flow.move_to(OrderStep.MENU)

    def update_item_quantity(self, item_id: str, quantity: int) -> None:
        self.cart = cart_ops.update_item_quantity(self.cart, item_id, quantity)

    def remove_item(self, item_id: str) -> None:
        self.cart = cart_ops.remove_item(self.cart, item_id)

    def confirm(self) -> Tuple[CartItem, ...]:
        """
        Confirm the order and hand the cart to the submission side.

        Raises:
            EmptyCartError: If there is nothing in the cart
        """
        if not self.cart:
            raise EmptyCartError("Cannot confirm an empty order")
        self.flow.move_to(OrderStep.CONFIRMATION)
        logger.info(
            "Order confirmed at restaurant %s: %d items",
            self.config.restaurant_id, cart_ops.item_count(self.cart),
        )
        return self.cart

    def reset(self) -> None:
        """Start over for the next customer (inactivity timeout or new order)."""
        self.flow.reset()
        self.cart = ()
        self.table_number = None
        self.customization = None
