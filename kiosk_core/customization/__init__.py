"""
Menu Item Customization Engine.

This package holds the rules for customizing one menu item and turning the
result into a cart line item:
- Initial selections for a fresh customization (initializer)
- Pure reducers for topping and option taps (toppings, options)
- Conditional category display and submission checks (visibility, validation)
- Cart line item construction (cart_builder)
- The ordering step flow and the sessions a hosting view drives (flow, session)
"""

from .initializer import (
    initialize_toppings,
    initialize_options,
)

from .toppings import toggle_topping

from .options import (
    choices_for,
    toggle_choice,
)

from .visibility import (
    should_show_category,
    visible_topping_categories,
    prune_hidden_selections,
)

from .validation import (
    SelectionIssue,
    find_selection_issues,
    selection_count,
)

from .cart_builder import (
    ValidationError,
    build_cart_item,
    new_cart_item_id,
)

from .flow import (
    OrderStep,
    OrderType,
    OrderFlow,
    InvalidTransitionError,
)

from .session import (
    CustomizationSession,
    OrderSession,
    EmptyCartError,
)

__all__ = [
    # Initializer
    "initialize_toppings",
    "initialize_options",
    # Reducers
    "toggle_topping",
    "choices_for",
    "toggle_choice",
    # Visibility
    "should_show_category",
    "visible_topping_categories",
    "prune_hidden_selections",
    # Validation
    "SelectionIssue",
    "find_selection_issues",
    "selection_count",
    # Cart builder
    "ValidationError",
    "build_cart_item",
    "new_cart_item_id",
    # Flow
    "OrderStep",
    "OrderType",
    "OrderFlow",
    "InvalidTransitionError",
    # Sessions
    "CustomizationSession",
    "OrderSession",
    "EmptyCartError",
]
