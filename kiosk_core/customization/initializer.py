"""
Selection state initialization.

Builds the starting selections for a fresh customization of a menu item.
Mandatory single-choice categories (e.g., "Choose a size") start with their
first topping selected so the state is valid as soon as the screen opens.
Everything else starts empty.

The result must be rebuilt whenever the menu item identity changes; a state
built for one item never carries over to another.
"""

import logging

from ..schemas import (
    CategoryKind,
    MenuItemWithOptions,
    SelectedOption,
    SelectedOptions,
    ToppingSelection,
)

logger = logging.getLogger(__name__)


def initialize_toppings(menu_item: MenuItemWithOptions) -> dict:
    """
    Build the initial topping selections for a menu item.

    Returns:
        Mapping of category_id -> tuple of ToppingSelection. Only categories
        with a pre-selection get a key.
    """
    selected = {}
    for category in menu_item.topping_categories:
        if (
            category.required
            and category.min_selections >= 1
            and category.kind == CategoryKind.SINGLE
            and category.toppings
        ):
            first = category.toppings[0]
            selected[category.id] = (ToppingSelection(first.id, 1),)

    logger.debug(
        "Initialized toppings for %s: %d pre-selected categories",
        menu_item.id, len(selected),
    )
    return selected


def initialize_options(menu_item: MenuItemWithOptions) -> SelectedOptions:
    """Build the initial option selections: first choice of required single groups."""
    selected = []
    for option in menu_item.options:
        if option.required and not option.multiple and option.choices:
            selected.append(SelectedOption(option.id, (option.choices[0].id,)))
    return tuple(selected)
