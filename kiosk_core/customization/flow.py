"""
Order step state machine.

The kiosk walks a customer through a fixed sequence of screens:

    welcome -> order_type -> menu -> customize_item -> cart -> confirmation

Movement is forward-only, with two ways back from the cart: editing a line
item re-enters customize_item, and "add another item" returns to the menu.
The order type is chosen on the order_type screen and cannot change once the
menu is shown. An inactivity timeout or a finished order resets to welcome.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class OrderStep(str, Enum):
    """Screens of the ordering flow."""
    WELCOME = "welcome"
    ORDER_TYPE = "order_type"
    MENU = "menu"
    CUSTOMIZE_ITEM = "customize_item"
    CART = "cart"
    CONFIRMATION = "confirmation"


class OrderType(str, Enum):
    """How the customer eats the order."""
    TAKEAWAY = "takeaway"
    DINE_IN = "dine-in"


ALLOWED_TRANSITIONS = {
    OrderStep.WELCOME: {OrderStep.ORDER_TYPE},
    OrderStep.ORDER_TYPE: {OrderStep.MENU},
    OrderStep.MENU: {OrderStep.CUSTOMIZE_ITEM, OrderStep.CART},
    OrderStep.CUSTOMIZE_ITEM: {OrderStep.CART},
    OrderStep.CART: {OrderStep.CUSTOMIZE_ITEM, OrderStep.MENU, OrderStep.CONFIRMATION},
    OrderStep.CONFIRMATION: set(),
}


class InvalidTransitionError(Exception):
    """Raised when the flow is asked to move somewhere it cannot go."""

    def __init__(self, current: OrderStep, target: OrderStep, reason: str = None):
        self.current = current
        self.target = target
        message = f"Cannot move from {current.value} to {target.value}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass
class OrderFlow:
    """Current step of the ordering flow plus the order type chosen so far."""
    step: OrderStep = OrderStep.WELCOME
    order_type: Optional[OrderType] = None

    def can_move_to(self, target: OrderStep) -> bool:
        """Check whether a transition is allowed from the current step."""
        if target not in ALLOWED_TRANSITIONS[self.step]:
            return False
        if self.step == OrderStep.ORDER_TYPE and target == OrderStep.MENU:
            return self.order_type is not None
        return True

    def choose_order_type(self, order_type: OrderType) -> None:
        """Record the order type; only possible on the order type screen."""
        if self.step != OrderStep.ORDER_TYPE:
            raise InvalidTransitionError(
                self.step, OrderStep.MENU,
                "order type can only be chosen on the order type screen",
            )
        self.order_type = OrderType(order_type)

    def move_to(self, target: OrderStep) -> None:
        """Advance to another step."""
        target = OrderStep(target)
        if not self.can_move_to(target):
            reason = None
            if self.step == OrderStep.ORDER_TYPE and target == OrderStep.MENU:
                reason = "no order type chosen"
            raise InvalidTransitionError(self.step, target, reason)
        logger.debug("Order flow: %s -> %s", self.step.value, target.value)
        self.step = target

    def reset(self) -> None:
        """Return to the welcome screen for the next customer."""
        self.step = OrderStep.WELCOME
        self.order_type = None
